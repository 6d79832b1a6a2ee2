# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="fskit",
    version="0.1.0",
    description="Filesystem helpers: path resolution, tree traversal, copy/move and extension classification",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["fskit", "fskit.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiofiles>=23.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
