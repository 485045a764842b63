"""Catalog loading interface and implementations.

Defines the contract for loading catalogs and provides a loader that parses
every file of a FileTree through an extension-keyed unmarshaller registry.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml

from request_i18n.i18n.errors import CatalogLoadError, LanguageTagError, UnsupportedFormatError
from request_i18n.i18n.filesystem import FileEntry, FileTree
from request_i18n.i18n.models import (
    MESSAGE_KEYS,
    Catalog,
    CatalogBuilder,
    LanguageTag,
    Message,
)
from request_i18n.logging import get_module_logger

logger = get_module_logger()

# Top-level key a file may use to declare its language
LANGUAGE_HEADER = "_language"

Unmarshaller = Callable[[bytes], Any]


def _load_toml(data: bytes) -> Any:
    return tomllib.loads(data.decode("utf-8"))


class UnmarshalRegistry:
    """Registry of file extension -> unmarshaller.

    Unmarshallers turn raw file bytes into plain data and signal bad input
    by raising ValueError (or yaml.YAMLError).
    """

    def __init__(self):
        self._unmarshallers: Dict[str, Unmarshaller] = {}

    def register(self, extension: str, unmarshaller: Unmarshaller) -> None:
        """Register an unmarshaller for an extension ("yaml" or ".yaml")."""
        self._unmarshallers[extension.lstrip(".").lower()] = unmarshaller

    def get(self, extension: str) -> Optional[Unmarshaller]:
        return self._unmarshallers.get(extension.lstrip(".").lower())

    @property
    def extensions(self) -> List[str]:
        return sorted(self._unmarshallers)

    @classmethod
    def default(cls) -> "UnmarshalRegistry":
        """Registry with YAML, JSON and TOML support."""
        registry = cls()
        registry.register("yaml", yaml.safe_load)
        registry.register("yml", yaml.safe_load)
        registry.register("json", json.loads)
        registry.register("toml", _load_toml)
        return registry


class TranslationLoader(ABC):
    """Abstract base for catalog loaders."""

    @abstractmethod
    def load(self) -> Catalog:
        """Load a complete catalog.

        Returns:
            Catalog with every language found.

        Raises:
            CatalogLoadError: If any source cannot be read or parsed.
        """


class FileTreeTranslationLoader(TranslationLoader):
    """Loads every file of a FileTree into one catalog.

    A file's language comes from, in order: a top-level ``_language``
    header, a dot-separated segment of its filename (``active.en-US.yaml``),
    or its parent directory (``fr/messages.yaml``). See detect_language()
    for how a filename and a language directory are weighed.

    Attributes:
        file_tree: Tree holding the catalog files.
        registry: Extension -> unmarshaller registry.
    """

    def __init__(self, file_tree: FileTree, registry: Optional[UnmarshalRegistry] = None):
        self.file_tree = file_tree
        self.registry = registry or UnmarshalRegistry.default()

    def load(self) -> Catalog:
        """Parse every file of the tree into a new catalog.

        The catalog is stamped with the time the walk started, so a file
        changed while loading is seen as newer by the next staleness check.
        """
        started_at = datetime.now(timezone.utc)
        builder = CatalogBuilder()

        try:
            entries = sorted(
                (entry for entry in self.file_tree.walk() if not entry.is_dir),
                key=lambda entry: entry.path,
            )
        except OSError as e:
            logger.error("translations_walk_failed", error=str(e))
            raise CatalogLoadError(f"unable to walk translations: {e}") from e

        for entry in entries:
            parsed = self.parse_file(entry)
            if parsed is None:
                continue
            tag, messages = parsed
            builder.add_messages(tag, messages, source=self.source_key(entry))

        catalog = builder.build(loaded_at=started_at)
        logger.info(
            "loaded_translations",
            file_count=len(entries),
            languages=[str(tag) for tag in catalog.languages],
        )
        return catalog

    @staticmethod
    def source_key(entry: FileEntry) -> str:
        """Registry key of a file: directory plus base name.

        Keeps a file named after a language ("en.yaml") distinct from the
        language key itself and from same-named files in other directories.
        """
        return f"{entry.directory}/{entry.name}"

    def parse_file(self, entry: FileEntry) -> Optional[Tuple[LanguageTag, List[Message]]]:
        """Read and parse one file.

        Returns:
            (language, messages), or None for an empty file.

        Raises:
            CatalogLoadError: If the file cannot be read, parsed, or has no
                detectable language.
        """
        path = entry.path
        extension = PurePosixPath(path).suffix.lstrip(".")
        unmarshaller = self.registry.get(extension)
        if unmarshaller is None:
            logger.error("unsupported_locale_file", file=path, extension=extension)
            raise UnsupportedFormatError(
                f"unable to parse locale file {path}: no unmarshaller for '{extension}'",
                path=path,
            )

        try:
            data = self.file_tree.read_bytes(path)
        except OSError as e:
            logger.error("locale_file_read_error", file=path, error=str(e))
            raise CatalogLoadError(f"unable to read locale file {path}: {e}", path=path) from e

        try:
            content = unmarshaller(data)
            if content is None or content == {} or content == []:
                logger.warning("empty_locale_file", file=path)
                return None
            header, content = self._split_header(content)
            tag = self.detect_language(entry, header)
            messages = list(self._iter_messages(content))
        except (yaml.YAMLError, ValueError) as e:
            logger.error("locale_file_parse_error", file=path, error=str(e))
            raise CatalogLoadError(f"unable to parse locale file {path}: {e}", path=path) from e

        logger.debug("parsed_locale_file", file=path, language=str(tag), message_count=len(messages))
        return tag, messages

    def detect_language(self, entry: FileEntry, header: Optional[str] = None) -> LanguageTag:
        """Determine the language a file contributes to.

        Inside a directory named after a language, a filename segment only
        wins when it is clearly a tag: it has a script or region
        (``fr-CA``), or sits after a dot (``active.en.yaml``). A bare
        ``de/ui.yaml`` belongs to ``de``.

        Raises:
            LanguageTagError: If no language can be determined.
        """
        if header is not None:
            return LanguageTag.parse(header)

        directory_tag = None
        directory = PurePosixPath(entry.directory).name
        if directory:
            try:
                directory_tag = LanguageTag.parse(directory)
            except LanguageTagError:
                pass

        stem_parts = entry.name.split(".")[:-1] if "." in entry.name else [entry.name]
        for part in reversed(stem_parts):
            try:
                tag = LanguageTag.parse(part)
            except LanguageTagError:
                continue
            if directory_tag is None or len(stem_parts) > 1 or tag != tag.base:
                return tag

        if directory_tag is not None:
            return directory_tag

        raise LanguageTagError(f"unable to determine the language of {entry.path}")

    @staticmethod
    def _split_header(content: Any) -> Tuple[Optional[str], Any]:
        if isinstance(content, Mapping) and LANGUAGE_HEADER in content:
            content = dict(content)
            header = content.pop(LANGUAGE_HEADER)
            if not isinstance(header, str):
                raise ValueError(f"'{LANGUAGE_HEADER}' must be a string")
            return header, content
        return None, content

    def _iter_messages(self, content: Any, prefix: str = "") -> Iterator[Message]:
        """Yield messages from parsed file content.

        Accepts a mapping of id -> template / plural mapping, with nested
        mappings joined into dotted ids, or a list of mappings carrying an
        ``id`` key.
        """
        if isinstance(content, list) and not prefix:
            for item in content:
                if not isinstance(item, Mapping) or "id" not in item:
                    raise ValueError("list entries must be mappings with an 'id'")
                yield Message.from_value(str(item["id"]), item)
            return

        if not isinstance(content, Mapping):
            raise ValueError(f"expected a mapping of messages, got {type(content).__name__}")

        for key, value in content.items():
            message_id = f"{prefix}{key}"
            if isinstance(value, Mapping) and not _is_message(value):
                yield from self._iter_messages(value, prefix=f"{message_id}.")
            else:
                yield Message.from_value(message_id, value)


def _is_message(value: Mapping) -> bool:
    keys = {str(key).lower() for key in value}
    if not keys & MESSAGE_KEYS:
        return False
    return not any(isinstance(item, (Mapping, list)) for item in value.values())
