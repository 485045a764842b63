"""Translator facade.

Orchestrates a unit of work: reload stale catalogs (development only),
negotiate the language preference list once, bind a localizer and expose
a translate closure.

Usage:
    translator = Translator(DirectoryFileTree("locales"), "en-US")

    state = translator.begin(ctx)
    translator.translate(state, "items", 5)
    translator.refresh(state, "fr")  # user switched language
"""

from typing import Any, List, Optional, Sequence, Union

from structlog.stdlib import BoundLogger

from request_i18n.i18n.context import LocalizationState, RequestContext
from request_i18n.i18n.filesystem import FileTree
from request_i18n.i18n.loader import FileTreeTranslationLoader, UnmarshalRegistry
from request_i18n.i18n.localizer import Localizer
from request_i18n.i18n.models import Catalog, LanguageTag, Message
from request_i18n.i18n.plural import PluralRules
from request_i18n.i18n.reload import ReloadSupervisor
from request_i18n.i18n.resolvers import ExtractorOptions, LanguageExtractor, LanguageNegotiator
from request_i18n.i18n.store import CatalogStore
from request_i18n.logging import get_module_logger

logger = get_module_logger()


class Translator:
    """Localization service shared by every unit of work.

    Attributes:
        file_tree: Tree holding the catalog files.
        default_language: Canonical default language tag string.
        helper_name: Key of the translate closure in LocalizationState.helpers.
        environment: Runtime mode; "development" enables hot reload.
        store: Holder of the published catalog.
        negotiator: Language negotiator (extractor chain and options).
        supervisor: Staleness checker for hot reload.
    """

    def __init__(
        self,
        file_tree: FileTree,
        default_language: str,
        *,
        helper_name: str = "t",
        extractors: Optional[Sequence[LanguageExtractor]] = None,
        extractor_options: Optional[ExtractorOptions] = None,
        registry: Optional[UnmarshalRegistry] = None,
        environment: str = "production",
        plural_rules: Optional[PluralRules] = None,
    ):
        """Initialize the translator and load the catalog.

        Raises:
            LanguageTagError: If default_language is not a valid tag.
            CatalogLoadError: If the initial load fails.
        """
        self.default_language = str(LanguageTag.parse(default_language))
        self.file_tree = file_tree
        self.helper_name = helper_name
        self.environment = environment
        self.plural_rules = plural_rules or PluralRules()
        self.store = CatalogStore(FileTreeTranslationLoader(file_tree, registry))
        self.negotiator = LanguageNegotiator(
            self.default_language,
            extractors=extractors,
            options=extractor_options,
        )
        self.supervisor = ReloadSupervisor(file_tree)
        self.load()
        logger.info(
            "initialized_translator",
            default_language=self.default_language,
            environment=environment,
            languages=self.available_languages(),
        )

    @property
    def catalog(self) -> Catalog:
        return self.store.catalog

    @property
    def extractors(self) -> List[LanguageExtractor]:
        return self.negotiator.extractors

    @property
    def extractor_options(self) -> ExtractorOptions:
        return self.negotiator.options

    def load(self) -> Catalog:
        """Load all catalog files and publish the result.

        Raises:
            CatalogLoadError: If any file fails; the previous catalog stays live.
        """
        return self.store.load()

    def add_translation(self, tag: Union[str, LanguageTag], *messages: Message) -> Catalog:
        """Add messages directly, without a file (e.g., from a database)."""
        return self.store.add_translation(tag, *messages)

    def reload_if_stale(self, environment: Optional[str] = None, log: Optional[BoundLogger] = None) -> bool:
        """Reload the catalog if files changed (development mode only).

        Returns:
            True if this call found the catalog stale.

        Raises:
            CatalogLoadError: If the reload fails.
        """
        catalog = self.store.catalog
        if not self.supervisor.needs_reload(environment or self.environment, catalog.loaded_at, log):
            return False
        self.store.load(expected=catalog)
        return True

    def begin(
        self,
        ctx: RequestContext,
        state: Optional[LocalizationState] = None,
        environment: Optional[str] = None,
    ) -> LocalizationState:
        """Start localizing a unit of work.

        Reloads stale catalogs, then reuses ``state`` if the unit of work
        already has one, or negotiates languages and builds a new one.

        Raises:
            CatalogLoadError: If a reload was needed and failed.
        """
        self.reload_if_stale(environment, ctx.logger)
        if state is not None:
            return state

        extracted = self.extract_languages(ctx)
        state = LocalizationState(
            extracted=extracted,
            languages=list(extracted),
            localizer=self.localizer(extracted),
        )
        state.helpers[self.helper_name] = state.translate
        return state

    def extract_languages(self, ctx: RequestContext) -> List[str]:
        return self.negotiator.extract(ctx)

    def localizer(self, languages: Sequence[str]) -> Localizer:
        return Localizer(lambda: self.store.catalog, languages, self.plural_rules)

    def translate(self, state: LocalizationState, translation_id: str, *args: Any) -> str:
        """Translate a message id for the unit of work.

        If no language has translation_id, translation_id itself is
        returned, which makes missing translations easy to spot.

        Args:
            state: State from begin().
            translation_id: Message to translate.
            *args: Nothing; a count (number or numeric string); template data
                (mapping or object); or a count followed by template data.

        Raises:
            PluralCountError: If the count is not a number.
            TemplateError: If the template references unknown data.
        """
        return state.localizer.localize(translation_id, *args)

    def translate_with_lang(self, lang: str, translation_id: str, *args: Any) -> str:
        """Translate a message id for one language, with the default as fallback.

        See translate() for arguments.
        """
        return self.localizer([lang, self.default_language]).localize(translation_id, *args)

    def refresh(self, state: LocalizationState, new_lang: str) -> LocalizationState:
        """Put new_lang ahead of the extracted languages and rebind the localizer.

        Extractors are not run again. Closures in state.helpers pick up the
        new localizer, so later translations of the unit of work (a flash
        message, for instance) use the new language.
        """
        state.languages = [new_lang] + state.extracted
        state.localizer = self.localizer(state.languages)
        logger.debug("refreshed_languages", languages=state.languages)
        return state

    def available_languages(self) -> List[str]:
        """Get the sorted list of languages the catalog provides."""
        return sorted({str(tag) for tag in self.store.catalog.languages})
