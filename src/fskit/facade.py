from __future__ import annotations

"""
FileSystem Facade.

Exposes the documented fskit operations as methods bound to a single
FsContext. Only the listed operations are available; there is no
fall-through to the os module.
"""

import logging
from typing import Optional, Sequence

from fskit.core import classifier, copy_move, paths, probe, walker
from fskit.domain.config import context_from_config, load_config, logging_config_from_config
from fskit.domain.context import FsContext, get_default_context
from fskit.domain.fs_models import ResolveRequest, StatusResult, TraversalSummary
from fskit.infra.logging import configure_logging
from fskit.validate_config import validate_config

logger = logging.getLogger(__name__)


class FileSystem:
    """
    Filesystem helpers sharing one context.

    The context carries the environment used for home expansion, the
    platform rules for absoluteness, the copy window size and the cached
    case-sensitivity flag.
    """

    def __init__(self, ctx: Optional[FsContext] = None) -> None:
        self.ctx = ctx if ctx is not None else get_default_context()

    @classmethod
    def from_config(cls, config_path: Optional[str] = None, *, setup_logging: bool = True) -> FileSystem:
        """
        Build an instance from the persisted configuration.

        Args:
            config_path: Explicit config file. Defaults to the user data dir.
            setup_logging: Configure the root logger from the same settings.
        """
        config, warnings = validate_config(load_config(config_path))
        if setup_logging:
            configure_logging(logging_config_from_config(config))
        for warning in warnings:
            logger.warning(f"Config: {warning}")
        return cls(context_from_config(config))

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def get_home_directory(self) -> Optional[str]:
        return paths.get_home_directory(self.ctx)

    def get_app_data_directory(self) -> Optional[str]:
        return paths.get_app_data_directory(self.ctx)

    def absolute(self, path: Optional[str]) -> Optional[str]:
        return paths.absolute(path, self.ctx)

    def normalize(self, path: Optional[str]) -> Optional[str]:
        return paths.normalize(path, self.ctx)

    def resolve_home(self, path: str) -> str:
        return paths.resolve_home(path, self.ctx)

    def tildify(self, path: str) -> str:
        return paths.tildify(path, self.ctx)

    def is_absolute(self, path: Optional[str]) -> bool:
        return paths.is_absolute(path, self.ctx)

    def resolve(
            self,
            load_paths: Sequence[str],
            target: Optional[str],
            extensions: Optional[Sequence[str]] = None,
    ) -> Optional[str]:
        request = ResolveRequest(load_paths=load_paths, target=target, extensions=extensions)
        return paths.resolve(request, self.ctx)

    def resolve_extension(self, path_base: str, extensions: Sequence[str]) -> Optional[str]:
        return paths.resolve_extension(path_base, extensions, self.ctx)

    def resolve_on_load_path(self, target: Optional[str], extensions: Optional[Sequence[str]] = None) -> Optional[str]:
        return paths.resolve_on_load_path(target, extensions, self.ctx)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    is_binary_extension = staticmethod(classifier.is_binary_extension)
    is_compressed_extension = staticmethod(classifier.is_compressed_extension)
    is_image_extension = staticmethod(classifier.is_image_extension)
    is_markdown_extension = staticmethod(classifier.is_markdown_extension)
    is_pdf_extension = staticmethod(classifier.is_pdf_extension)
    is_readme_path = staticmethod(classifier.is_readme_path)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    stat_no_exception = staticmethod(probe.stat_no_exception)
    lstat_no_exception = staticmethod(probe.lstat_no_exception)
    exists_sync = staticmethod(probe.exists_sync)
    is_directory_sync = staticmethod(probe.is_directory_sync)
    is_directory = staticmethod(probe.is_directory)
    is_file_sync = staticmethod(probe.is_file_sync)
    is_symbolic_link_sync = staticmethod(probe.is_symbolic_link_sync)
    is_symbolic_link = staticmethod(probe.is_symbolic_link)
    is_executable_sync = staticmethod(probe.is_executable_sync)
    get_size_sync = staticmethod(probe.get_size_sync)

    def probe_status(self, path: str, follow_symlinks: bool = True) -> StatusResult:
        return probe.probe_status(path, follow_symlinks)

    def is_case_insensitive(self) -> bool:
        return probe.is_case_insensitive(self.ctx)

    def is_case_sensitive(self) -> bool:
        return probe.is_case_sensitive(self.ctx)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    traverse_tree_sync = staticmethod(walker.traverse_tree_sync)
    list_tree_sync = staticmethod(walker.list_tree_sync)
    list_sync = staticmethod(walker.list_sync)
    list_dir = staticmethod(walker.list_dir)
    filter_extensions = staticmethod(walker.filter_extensions)

    async def traverse_tree(self, root_path: str, on_file, on_directory=None) -> TraversalSummary:
        return await walker.traverse_tree(root_path, on_file, on_directory)

    # -------------------------------------------------------------------------
    # Copy / Move / Remove
    # -------------------------------------------------------------------------

    move_sync = staticmethod(copy_move.move_sync)
    move = staticmethod(copy_move.move)
    remove_sync = staticmethod(copy_move.remove_sync)
    remove = staticmethod(copy_move.remove)
    make_tree_sync = staticmethod(copy_move.make_tree_sync)
    make_tree = staticmethod(copy_move.make_tree)
    write_file_sync = staticmethod(copy_move.write_file_sync)
    write_file = staticmethod(copy_move.write_file)

    def copy_sync(self, source_path: str, destination_path: str) -> None:
        copy_move.copy_sync(source_path, destination_path, self.ctx)

    def copy_file_sync(self, source: str, destination: str, buffer_size: Optional[int] = None) -> None:
        copy_move.copy_file_sync(source, destination, buffer_size, self.ctx)

    async def copy(self, source_path: str, destination_path: str) -> None:
        await copy_move.copy(source_path, destination_path, ctx=self.ctx)

    def md5_for_path(self, path: str) -> str:
        return copy_move.md5_for_path(path, self.ctx)

