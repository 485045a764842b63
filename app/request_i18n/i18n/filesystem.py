"""Read-only file trees catalogs are loaded from.

A FileTree enumerates entries recursively (with modification times) and
reads file bytes. Paths are relative, "/"-separated and never start with "/".
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class FileEntry:
    """One entry of a file tree walk.

    Attributes:
        path: Relative "/"-separated path (e.g., "fr/messages.yaml").
        is_dir: Whether the entry is a directory.
        modified_at: Last modification time (UTC).
    """

    path: str
    is_dir: bool
    modified_at: datetime

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def directory(self) -> str:
        """Parent directory of the entry, "." for top-level entries."""
        parent = str(PurePosixPath(self.path).parent)
        return parent or "."


class FileTree(Protocol):
    """Recursive, read-only file tree."""

    def walk(self) -> Iterator[FileEntry]:
        """Yield every entry below the root in a deterministic order.

        Raises:
            OSError: If the tree cannot be enumerated.
        """
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read a file.

        Raises:
            OSError: If the file cannot be read.
        """
        ...


def _raise(error: OSError) -> None:
    raise error


class DirectoryFileTree:
    """FileTree backed by a directory on disk."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        if not self.root.is_dir():
            raise ValueError(f"Translations directory not found: {self.root}")

    def walk(self) -> Iterator[FileEntry]:
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise):
            dirnames.sort()
            current = Path(dirpath)
            for name in sorted(dirnames + filenames):
                full_path = current / name
                stat = full_path.stat()
                yield FileEntry(
                    path=full_path.relative_to(self.root).as_posix(),
                    is_dir=name in dirnames,
                    modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                )

    def read_bytes(self, path: str) -> bytes:
        return (self.root / path).read_bytes()

    def __repr__(self) -> str:
        return f"DirectoryFileTree({str(self.root)!r})"


class MemoryFileTree:
    """FileTree held in memory, for tests and embedded catalogs.

    Directories are implied by file paths.

    Example:
        tree = MemoryFileTree({"en.yaml": b"hello: Hello"})
        tree.write("fr.yaml", b"hello: Bonjour")
    """

    def __init__(self, files: Optional[Dict[str, Union[bytes, str]]] = None):
        self._files: Dict[str, Tuple[bytes, datetime]] = {}
        for path, content in (files or {}).items():
            self.write(path, content)

    def write(
        self,
        path: str,
        content: Union[bytes, str],
        modified_at: Optional[datetime] = None,
    ) -> None:
        """Create or replace a file, stamping it with modified_at (default: now)."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        key = PurePosixPath(path.lstrip("/")).as_posix()
        self._files[key] = (content, modified_at or datetime.now(timezone.utc))

    def remove(self, path: str) -> None:
        del self._files[path]

    def walk(self) -> Iterator[FileEntry]:
        entries: Dict[str, FileEntry] = {}
        for path, (_, modified_at) in self._files.items():
            for parent in PurePosixPath(path).parents:
                key = parent.as_posix()
                if key == ".":
                    continue
                current = entries.get(key)
                if current is None or current.modified_at < modified_at:
                    entries[key] = FileEntry(path=key, is_dir=True, modified_at=modified_at)
            entries[path] = FileEntry(path=path, is_dir=False, modified_at=modified_at)
        for key in sorted(entries):
            yield entries[key]

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[path][0]
        except KeyError:
            raise FileNotFoundError(path) from None
