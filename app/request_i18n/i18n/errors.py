"""Exception hierarchy for the localization engine."""

from typing import Optional


class I18nError(Exception):
    """Base class for all localization errors."""


class CatalogLoadError(I18nError):
    """A catalog file could not be read or parsed.

    The load that raised it is aborted and the previously published
    catalog stays live.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UnsupportedFormatError(CatalogLoadError):
    """No unmarshaller is registered for the file extension."""


class LanguageTagError(I18nError, ValueError):
    """A language tag is not well formed."""


class PluralCountError(I18nError, ValueError):
    """A plural count argument is not a number."""


class TemplateError(I18nError, ValueError):
    """A template placeholder has no matching value in the template data."""

    def __init__(self, message: str, placeholder: Optional[str] = None):
        super().__init__(message)
        self.placeholder = placeholder


class ExtractorConfigError(I18nError):
    """A language extractor is missing a required option."""

    def __init__(self, option: str):
        super().__init__(f'"{option}" is not defined in LanguageExtractorOptions')
        self.option = option
