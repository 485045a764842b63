"""Staleness checks for hot reloading catalogs in development."""

from datetime import datetime
from typing import Optional

from structlog.stdlib import BoundLogger

from request_i18n.configuration import DEVELOPMENT
from request_i18n.i18n.filesystem import FileTree
from request_i18n.logging import get_module_logger

logger = get_module_logger()


class ReloadSupervisor:
    """Decides whether the catalog files changed since the last load.

    Only the development mode ever reloads; any other mode loads once.

    Attributes:
        file_tree: Tree holding the catalog files.
        development_mode: Mode string that enables reloading.
    """

    def __init__(self, file_tree: FileTree, development_mode: str = DEVELOPMENT):
        self.file_tree = file_tree
        self.development_mode = development_mode

    def needs_reload(
        self,
        mode: str,
        loaded_at: Optional[datetime],
        log: Optional[BoundLogger] = None,
    ) -> bool:
        """Check if the catalog must be reloaded.

        Args:
            mode: Current runtime mode.
            loaded_at: When the catalog was loaded, None if never.
            log: Log sink of the unit of work (default: module logger).

        Returns:
            True in development mode when the catalog was never loaded or a
            file is newer than loaded_at.
        """
        if mode != self.development_mode:
            return False
        if loaded_at is None:
            return True

        log = log or logger
        result = False
        try:
            for entry in self.file_tree.walk():
                if entry.is_dir:
                    continue
                if entry.modified_at > loaded_at:
                    log.info("reloading_translations", file=entry.name, path=entry.path)
                    result = True
        except OSError as e:
            log.error("needs_reload_walk_failed", error=str(e))
        return result
