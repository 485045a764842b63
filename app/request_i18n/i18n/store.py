"""Live catalog holder with copy-on-write publishing.

Readers take ``store.catalog`` once per lookup and never lock. Writers
(reloads and direct injection) serialize on a lock, build the replacement
catalog off to the side and publish it with a single reference assignment,
so a reader sees either the old catalog or the new one, never a mix.
"""

import threading
from typing import Dict, Optional, Tuple, Union

from request_i18n.i18n.loader import TranslationLoader
from request_i18n.i18n.models import Catalog, CatalogBuilder, LanguageTag, Message
from request_i18n.logging import get_module_logger

logger = get_module_logger()


class CatalogStore:
    """Owns the published catalog.

    Attributes:
        loader: TranslationLoader producing complete catalogs.
    """

    def __init__(self, loader: TranslationLoader):
        self.loader = loader
        self._catalog = Catalog()
        self._write_lock = threading.Lock()
        # (language, message id) -> latest injected message
        self._injected: Dict[Tuple[LanguageTag, str], Message] = {}

    @property
    def catalog(self) -> Catalog:
        """Currently published catalog."""
        return self._catalog

    def load(self, expected: Optional[Catalog] = None) -> Catalog:
        """Load a fresh catalog and publish it.

        Messages added through add_translation() are re-applied on top of
        the freshly loaded files.

        Args:
            expected: Catalog the caller judged stale. If another writer
                already replaced it, nothing is loaded.

        Returns:
            The published catalog.

        Raises:
            CatalogLoadError: If loading fails; the previous catalog stays live.
        """
        with self._write_lock:
            if expected is not None and self._catalog is not expected:
                logger.debug("catalog_already_reloaded")
                return self._catalog

            catalog = self.loader.load()
            if self._injected:
                builder = CatalogBuilder(catalog)
                for (tag, _), message in self._injected.items():
                    builder.add_messages(tag, [message])
                catalog = builder.build(loaded_at=catalog.loaded_at)

            self._catalog = catalog
            return catalog

    def add_translation(self, tag: Union[str, LanguageTag], *messages: Message) -> Catalog:
        """Add messages to the live catalog without a file.

        Useful to load translations from a database instead of disk. The
        messages survive later reloads; a later injection of the same
        language and id replaces the earlier one.

        Raises:
            LanguageTagError: If tag is not a valid language tag.
            TypeError: If an item is not a Message.
        """
        if not isinstance(tag, LanguageTag):
            tag = LanguageTag.parse(tag)
        for message in messages:
            if not isinstance(message, Message):
                raise TypeError(f"expected Message, got {type(message).__name__}")

        with self._write_lock:
            for message in messages:
                self._injected[(tag, message.id)] = message
            current = self._catalog
            catalog = CatalogBuilder(current).add_messages(tag, messages).build(
                loaded_at=current.loaded_at
            )
            self._catalog = catalog

        logger.info("added_translations", language=str(tag), message_count=len(messages))
        return catalog
