"""i18n system - request-scoped localization.

Main components:
- models: LanguageTag, Message, Catalog, Count, TemplateData
- loader: TranslationLoader, FileTreeTranslationLoader, UnmarshalRegistry
- localizer: Localizer with plural selection and template expansion
- resolvers: LanguageNegotiator and the language extractors
- reload: ReloadSupervisor for development hot reload
- translator: Translator facade and LocalizationState
"""

from request_i18n.i18n.context import LocalizationState, RequestContext, SimpleRequestContext
from request_i18n.i18n.errors import (
    CatalogLoadError,
    ExtractorConfigError,
    I18nError,
    LanguageTagError,
    PluralCountError,
    TemplateError,
    UnsupportedFormatError,
)
from request_i18n.i18n.filesystem import DirectoryFileTree, FileEntry, FileTree, MemoryFileTree
from request_i18n.i18n.loader import FileTreeTranslationLoader, TranslationLoader, UnmarshalRegistry
from request_i18n.i18n.localizer import Localizer
from request_i18n.i18n.models import (
    Catalog,
    CatalogBuilder,
    Count,
    LanguageTag,
    Message,
    PluralCategory,
    TemplateData,
)
from request_i18n.i18n.plural import PluralRules
from request_i18n.i18n.reload import ReloadSupervisor
from request_i18n.i18n.resolvers import (
    LanguageNegotiator,
    cookie_language_extractor,
    header_language_extractor,
    parse_accept_language,
    session_language_extractor,
    url_prefix_language_extractor,
)
from request_i18n.i18n.store import CatalogStore
from request_i18n.i18n.translator import Translator

__all__ = [
    "Catalog",
    "CatalogBuilder",
    "CatalogLoadError",
    "CatalogStore",
    "Count",
    "DirectoryFileTree",
    "ExtractorConfigError",
    "FileEntry",
    "FileTree",
    "FileTreeTranslationLoader",
    "I18nError",
    "LanguageNegotiator",
    "LanguageTag",
    "LanguageTagError",
    "LocalizationState",
    "Localizer",
    "MemoryFileTree",
    "Message",
    "PluralCategory",
    "PluralCountError",
    "PluralRules",
    "ReloadSupervisor",
    "RequestContext",
    "SimpleRequestContext",
    "TemplateData",
    "TemplateError",
    "TranslationLoader",
    "Translator",
    "UnmarshalRegistry",
    "UnsupportedFormatError",
    "cookie_language_extractor",
    "header_language_extractor",
    "parse_accept_language",
    "session_language_extractor",
    "url_prefix_language_extractor",
]
