"""Translation models for the localization engine.

Defines language tags, messages, the catalog they are indexed in, and the
argument types accepted by translate calls.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from request_i18n.i18n.errors import LanguageTagError, PluralCountError

_LANGUAGE = re.compile(r"^[a-z]{2,3}$")
_SCRIPT = re.compile(r"^[a-z]{4}$")
_REGION = re.compile(r"^(?:[a-z]{2}|[0-9]{3})$")
_VARIANT = re.compile(r"^(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3})$")


@dataclass(frozen=True)
class LanguageTag:
    """Normalized BCP 47 language tag (e.g., en-US, zh-Hant-TW).

    Only the language, script, region and variant subtags are supported.
    Frozen so tags can key catalogs.

    Attributes:
        language: Primary language subtag, lower case.
        script: Script subtag, title case (e.g., "Hant").
        region: Region subtag, upper case or three digits.
        variants: Variant subtags, lower case.
    """

    language: str
    script: Optional[str] = None
    region: Optional[str] = None
    variants: Tuple[str, ...] = ()

    def __str__(self) -> str:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        return "-".join(parts)

    @classmethod
    def parse(cls, text: str) -> "LanguageTag":
        """Parse and normalize a language tag.

        Accepts "-" or "_" as separator, in any letter case.

        Args:
            text: Tag string (e.g., "en-us", "zh_Hant_TW").

        Returns:
            Normalized LanguageTag.

        Raises:
            LanguageTagError: If text is not a well-formed tag.
        """
        if not isinstance(text, str):
            raise LanguageTagError(f"Language tag must be a string: {text!r}")

        subtags = re.split(r"[-_]", text.strip().lower())
        if not subtags or not _LANGUAGE.match(subtags[0]):
            raise LanguageTagError(f"Invalid language tag: {text!r}")

        language = subtags[0]
        script = None
        region = None
        variants: List[str] = []
        for subtag in subtags[1:]:
            if script is None and region is None and not variants and _SCRIPT.match(subtag):
                script = subtag.title()
            elif region is None and not variants and _REGION.match(subtag):
                region = subtag.upper()
            elif _VARIANT.match(subtag) and subtag not in variants:
                variants.append(subtag)
            else:
                raise LanguageTagError(f"Invalid language tag: {text!r}")

        return cls(language=language, script=script, region=region, variants=tuple(variants))

    @property
    def base(self) -> "LanguageTag":
        """Language-only tag (e.g., "en" for "en-US")."""
        return LanguageTag(language=self.language)

    def fallback_chain(self) -> List["LanguageTag"]:
        """Tags to try for this tag, most specific first.

        Returns:
            This tag followed by its truncations, e.g. en-US -> [en-US, en].
        """
        subtags: List[Tuple[str, Any]] = [("language", self.language)]
        if self.script:
            subtags.append(("script", self.script))
        if self.region:
            subtags.append(("region", self.region))
        for variant in self.variants:
            subtags.append(("variant", variant))

        chain = []
        for size in range(len(subtags), 0, -1):
            kwargs: Dict[str, Any] = {"variants": ()}
            for name, value in subtags[:size]:
                if name == "variant":
                    kwargs["variants"] += (value,)
                else:
                    kwargs[name] = value
            chain.append(LanguageTag(**kwargs))
        return chain


class PluralCategory(str, Enum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


# Keys that mark a catalog mapping as a message rather than a namespace
MESSAGE_KEYS = frozenset({"id", "hash", "description"} | {c.value for c in PluralCategory})


@dataclass(frozen=True)
class Message:
    """A translatable message scoped to one language.

    A single-text message only carries ``other``; plural messages carry a
    template per plural category they need.

    Attributes:
        id: Message identifier (e.g., "incident.created").
        other: Template used when no more specific category applies.
        zero, one, two, few, many: Optional plural category templates.
        description: Optional note for translators.
    """

    id: str
    other: str
    zero: Optional[str] = None
    one: Optional[str] = None
    two: Optional[str] = None
    few: Optional[str] = None
    many: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Message id must not be empty")
        if self.other is None:
            raise ValueError(f"Message {self.id} has no 'other' form")

    @property
    def is_plural(self) -> bool:
        return any(
            getattr(self, category.value) is not None
            for category in PluralCategory
            if category is not PluralCategory.OTHER
        )

    def template_for(self, category: Optional[PluralCategory]) -> str:
        """Template for a plural category, falling back to ``other``."""
        if category is None:
            return self.other
        template = getattr(self, category.value)
        return template if template is not None else self.other

    @classmethod
    def from_value(cls, message_id: str, value: Any) -> "Message":
        """Build a message from a raw catalog value.

        Args:
            message_id: Message identifier.
            value: A template string, or a mapping of plural categories
                (and optional description) to templates.

        Returns:
            Message instance.

        Raises:
            ValueError: If the value cannot describe a message.
        """
        if isinstance(value, Mapping):
            forms: Dict[str, Optional[str]] = {}
            for key, template in value.items():
                key = str(key).lower()
                if key in ("id", "hash"):
                    continue
                if key not in MESSAGE_KEYS:
                    raise ValueError(f"Unknown key '{key}' in message {message_id}")
                forms[key] = _as_template(message_id, template)
            if forms.get("other") is None:
                raise ValueError(f"Message {message_id} has no 'other' form")
            return cls(id=message_id, **forms)
        return cls(id=message_id, other=_as_template(message_id, value))


def _as_template(message_id: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"Message {message_id} has a non-text value: {value!r}")


@dataclass(frozen=True)
class Catalog:
    """Immutable index of messages by language tag.

    Built by CatalogBuilder and published as a whole; a reload produces a new
    Catalog instead of mutating this one.

    Attributes:
        messages: {LanguageTag: {message_id: Message}} as read-only mappings.
        loaded_at: When the files were loaded (UTC), None if never loaded.
        sources: {source key: LanguageTag} for every file that contributed.
    """

    messages: Mapping[LanguageTag, Mapping[str, Message]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    loaded_at: Optional[datetime] = None
    sources: Mapping[str, LanguageTag] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def languages(self) -> List[LanguageTag]:
        return list(self.messages.keys())

    def has_language(self, tag: LanguageTag) -> bool:
        return tag in self.messages

    def get_message(self, tag: LanguageTag, message_id: str) -> Optional[Message]:
        """Retrieve a message by language and id, or None if absent."""
        return self.messages.get(tag, {}).get(message_id)


class CatalogBuilder:
    """Mutable staging area a Catalog is built in before publishing."""

    def __init__(self, base: Optional[Catalog] = None):
        self._messages: Dict[LanguageTag, Dict[str, Message]] = {}
        self._sources: Dict[str, LanguageTag] = {}
        if base is not None:
            for tag, messages in base.messages.items():
                self._messages[tag] = dict(messages)
            self._sources.update(base.sources)

    def add_messages(
        self,
        tag: LanguageTag,
        messages: Iterable[Message],
        source: Optional[str] = None,
    ) -> "CatalogBuilder":
        """Add messages for a language; later messages override earlier ones."""
        table = self._messages.setdefault(tag, {})
        for message in messages:
            table[message.id] = message
        if source is not None:
            self._sources[source] = tag
        return self

    def build(self, loaded_at: Optional[datetime] = None) -> Catalog:
        return Catalog(
            messages=MappingProxyType(
                {tag: MappingProxyType(dict(table)) for tag, table in self._messages.items()}
            ),
            loaded_at=loaded_at,
            sources=MappingProxyType(dict(self._sources)),
        )


@dataclass(frozen=True)
class Count:
    """Plural count argument for a translate call.

    Attributes:
        value: An int, float or Decimal, or a number formatted as a string
            (e.g., "123.45").
    """

    value: Any

    def number(self):
        """Numeric value of the count.

        Strings are parsed as Decimal so visible fraction digits ("1.0")
        survive for plural selection.

        Raises:
            PluralCountError: If the value is not a finite number.
        """
        value = self.value
        if isinstance(value, bool):
            raise PluralCountError(f"Invalid plural count: {value!r}")
        if isinstance(value, str):
            try:
                value = Decimal(value.strip())
            except InvalidOperation as e:
                raise PluralCountError(f"Invalid plural count: {self.value!r}") from e
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise PluralCountError(f"Invalid plural count: {self.value!r}")
            return value
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise PluralCountError(f"Invalid plural count: {self.value!r}")
            return value
        raise PluralCountError(f"Invalid plural count: {self.value!r}")


@dataclass(frozen=True)
class TemplateData:
    """Template data argument: a mapping, or an object read by attribute."""

    data: Any


def is_count_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal, str))


def resolve_args(*args: Any) -> Tuple[Optional[Count], Optional[TemplateData]]:
    """Convert raw translate arguments to a (count, data) pair.

    - no args: plain lookup
    - (count,) or (count, data): numbers and numeric strings are counts
    - (data,): anything else is template data
    - (None, data): no count, template data

    Raises:
        TypeError: If more than two arguments are given.
    """
    if len(args) > 2:
        raise TypeError(f"translate takes at most 2 arguments ({len(args)} given)")
    if not args:
        return None, None

    first = args[0]
    if isinstance(first, TemplateData):
        return None, first
    if first is not None and not isinstance(first, Count) and not is_count_value(first):
        return None, TemplateData(first)

    count = first if first is None or isinstance(first, Count) else Count(first)
    data = args[1] if len(args) > 1 else None
    if data is not None and not isinstance(data, TemplateData):
        data = TemplateData(data)
    return count, data
