"""Plural-aware message resolution with template expansion.

A Localizer is bound to a language preference list and reads the current
catalog on every lookup, so it keeps working across reloads.
"""

import re
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from request_i18n.i18n.errors import LanguageTagError, TemplateError
from request_i18n.i18n.models import (
    Catalog,
    Count,
    LanguageTag,
    Message,
    TemplateData,
    resolve_args,
)
from request_i18n.i18n.plural import PluralRules
from request_i18n.logging import get_module_logger

logger = get_module_logger()

# {{name}} or {{.Name}}; single braces are literal text
_PLACEHOLDER = re.compile(r"\{\{\s*\.?(\w+)\s*\}\}")

# Template data key holding the count when no other data is given
PLURAL_COUNT_KEY = "PluralCount"


def expand_template(template: str, data: Any) -> str:
    """Substitute placeholders in a template.

    Values are read from mapping keys, or from attributes for any other
    object (dataclasses, models).

    Raises:
        TemplateError: If a placeholder has no matching value.
    """

    def _substitute(match: re.Match) -> str:
        return str(_lookup(data, match.group(1)))

    return _PLACEHOLDER.sub(_substitute, template)


def _lookup(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        if name in data:
            return data[name]
    elif data is not None and hasattr(data, name):
        return getattr(data, name)

    available = list(data.keys()) if isinstance(data, Mapping) else []
    logger.error("missing_interpolation_variable", variable=name, available_variables=available)
    raise TemplateError(f"Missing interpolation variable: {name}", placeholder=name)


class Localizer:
    """Resolves message ids against a language preference list.

    Attributes:
        languages: Preference list as given, most preferred first.
        tags: Parsed preference list; unparsable entries are dropped.
    """

    def __init__(
        self,
        catalog_source: Callable[[], Catalog],
        languages: Sequence[str],
        plural_rules: Optional[PluralRules] = None,
    ):
        self._catalog_source = catalog_source
        self.languages = list(languages)
        self.plural_rules = plural_rules or PluralRules()
        self.tags = self._parse_tags(self.languages)

    @staticmethod
    def _parse_tags(languages: Sequence[str]) -> List[LanguageTag]:
        tags = []
        for language in languages:
            try:
                tags.append(LanguageTag.parse(language))
            except LanguageTagError:
                logger.debug("skipped_invalid_language", language=language)
        return tags

    def localize(self, message_id: str, *args: Any) -> str:
        """Translate a message id.

        Args:
            message_id: Message to resolve.
            *args: Nothing, a count, template data, or a count followed by
                template data. See resolve_args().

        Returns:
            The rendered message, or message_id if no language has it.

        Raises:
            PluralCountError: If the count is not a number.
            TemplateError: If the template references unknown data.
        """
        count, data = resolve_args(*args)
        return self.resolve(message_id, count, data)

    def resolve(
        self,
        message_id: str,
        count: Optional[Count] = None,
        data: Optional[TemplateData] = None,
    ) -> str:
        number = count.number() if count is not None else None

        found = self.find_message(message_id)
        if found is None:
            logger.debug(
                "translation_not_found",
                key=message_id,
                languages=[str(tag) for tag in self.tags],
            )
            return message_id

        tag, message = found
        category = self.plural_rules.get_category(number, tag) if number is not None else None
        template = message.template_for(category)

        if count is None and data is None:
            return template
        if data is None:
            data = TemplateData({PLURAL_COUNT_KEY: count.value})
        return expand_template(template, data.data)

    def find_message(self, message_id: str) -> Optional[Tuple[LanguageTag, Message]]:
        """Find a message in preference order.

        Each preferred tag is tried with its fallback chain (en-US, then en)
        before moving on to the next preferred tag.
        """
        catalog = self._catalog_source()
        for tag in self.tags:
            for candidate in tag.fallback_chain():
                message = catalog.get_message(candidate, message_id)
                if message is not None:
                    return candidate, message
        return None
