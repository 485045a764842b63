"""Factory functions for creating i18n components.

Builds a Translator from application settings.
"""

from pathlib import Path
from typing import Optional

import structlog

from request_i18n.configuration import Settings, get_settings
from request_i18n.i18n.filesystem import DirectoryFileTree, FileTree
from request_i18n.i18n.resolvers import DEFAULT_EXTRACTORS, url_prefix_language_extractor
from request_i18n.i18n.translator import Translator

logger = structlog.get_logger()


def create_translator(
    settings: Optional[Settings] = None,
    file_tree: Optional[FileTree] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Args:
        settings: Application settings (default: get_settings()).
        file_tree: Catalog files (default: settings.i18n.LOCALES_DIR on disk).

    Returns:
        Translator: Loaded translator.

    Raises:
        ValueError: If the locales directory does not exist.
        CatalogLoadError: If the initial load fails.

    Usage:
        # Use settings from the environment
        translator = create_translator()

        # Catalogs from another directory
        translator = create_translator(file_tree=DirectoryFileTree(Path("/srv/locales")))
    """
    settings = settings or get_settings()
    i18n = settings.i18n

    if file_tree is None:
        file_tree = DirectoryFileTree(Path(i18n.LOCALES_DIR))

    extractors = list(DEFAULT_EXTRACTORS)
    if i18n.URL_PREFIX_ENABLED:
        extractors.append(url_prefix_language_extractor)

    translator = Translator(
        file_tree,
        i18n.DEFAULT_LANGUAGE,
        helper_name=i18n.HELPER_NAME,
        extractors=extractors,
        extractor_options=i18n.extractor_options,
        environment=settings.ENVIRONMENT,
    )
    logger.info(
        "translator_created",
        file_tree=repr(file_tree),
        language_count=len(translator.available_languages()),
        url_prefix_enabled=i18n.URL_PREFIX_ENABLED,
    )
    return translator
