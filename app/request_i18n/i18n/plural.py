"""CLDR plural rules.

Selects the plural category of a count for a language. Rules follow the
CLDR cardinal rules and are keyed by primary language subtag; languages
without a registered rule always select "other".

Example:
    rules = PluralRules()
    rules.get_category(5, LanguageTag.parse("ru"))  # PluralCategory.MANY
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, List, Union

from request_i18n.i18n.models import LanguageTag, PluralCategory

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class PluralOperands:
    """CLDR plural operands.

    See: https://unicode.org/reports/tr35/tr35-numbers.html#Operands
    """

    n: float  # Absolute value
    i: int  # Integer digits
    v: int  # Visible fraction digits (with trailing zeros)
    w: int  # Visible fraction digits (without trailing zeros)
    f: int  # Fraction digits as integer (with trailing zeros)
    t: int  # Fraction digits as integer (without trailing zeros)

    @classmethod
    def from_number(cls, number: Number) -> "PluralOperands":
        """Create operands from a number.

        Decimals keep their visible fraction digits, so Decimal("1.0")
        has v=1 while 1 has v=0.
        """
        if isinstance(number, int):
            abs_n = abs(number)
            return cls(n=float(abs_n), i=abs_n, v=0, w=0, f=0, t=0)

        if isinstance(number, float):
            text = repr(abs(number))
            if "e" in text or "E" in text:
                text = format(Decimal(text), "f")
        else:
            text = format(abs(number), "f")

        integer_part, _, fraction = text.partition(".")
        trimmed = fraction.rstrip("0")
        if isinstance(number, float) and fraction == "0":
            # repr(1.0) == "1.0"; a float has no visible fraction digits
            fraction = trimmed = ""
        return cls(
            n=float(abs(number)),
            i=int(integer_part or 0),
            v=len(fraction),
            w=len(trimmed),
            f=int(fraction) if fraction else 0,
            t=int(trimmed) if trimmed else 0,
        )


PluralRuleFunc = Callable[[PluralOperands], PluralCategory]


def _one_other(op: PluralOperands) -> PluralCategory:
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _n_is_one(op: PluralOperands) -> PluralCategory:
    if op.n == 1:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _zero_or_one(op: PluralOperands) -> PluralCategory:
    if op.i in (0, 1):
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _french(op: PluralOperands) -> PluralCategory:
    if op.i in (0, 1):
        return PluralCategory.ONE
    if op.i != 0 and op.i % 1000000 == 0 and op.v == 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _spanish(op: PluralOperands) -> PluralCategory:
    if op.n == 1:
        return PluralCategory.ONE
    if op.i != 0 and op.i % 1000000 == 0 and op.v == 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _slavic(op: PluralOperands) -> PluralCategory:
    i10 = op.i % 10
    i100 = op.i % 100
    if op.v == 0 and i10 == 1 and i100 != 11:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not 12 <= i100 <= 14:
        return PluralCategory.FEW
    if op.v == 0 and (i10 == 0 or 5 <= i10 <= 9 or 11 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _south_slavic(op: PluralOperands) -> PluralCategory:
    i10, i100 = op.i % 10, op.i % 100
    f10, f100 = op.f % 10, op.f % 100
    if (op.v == 0 and i10 == 1 and i100 != 11) or (f10 == 1 and f100 != 11):
        return PluralCategory.ONE
    if (op.v == 0 and 2 <= i10 <= 4 and not 12 <= i100 <= 14) or (
        2 <= f10 <= 4 and not 12 <= f100 <= 14
    ):
        return PluralCategory.FEW
    return PluralCategory.OTHER


def _polish(op: PluralOperands) -> PluralCategory:
    i10 = op.i % 10
    i100 = op.i % 100
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not 12 <= i100 <= 14:
        return PluralCategory.FEW
    if op.v == 0 and ((op.i != 1 and i10 in (0, 1)) or 5 <= i10 <= 9 or 12 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _czech(op: PluralOperands) -> PluralCategory:
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if 2 <= op.i <= 4 and op.v == 0:
        return PluralCategory.FEW
    if op.v != 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _romanian(op: PluralOperands) -> PluralCategory:
    n100 = int(op.n) % 100
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if op.v != 0 or op.n == 0 or (op.n == int(op.n) and op.n != 1 and 1 <= n100 <= 19):
        return PluralCategory.FEW
    return PluralCategory.OTHER


def _lithuanian(op: PluralOperands) -> PluralCategory:
    n10 = int(op.n) % 10
    n100 = int(op.n) % 100
    integral = op.n == int(op.n)
    if integral and n10 == 1 and not 11 <= n100 <= 19:
        return PluralCategory.ONE
    if integral and 2 <= n10 <= 9 and not 11 <= n100 <= 19:
        return PluralCategory.FEW
    if op.f != 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _latvian(op: PluralOperands) -> PluralCategory:
    n10 = int(op.n) % 10
    n100 = int(op.n) % 100
    f10, f100 = op.f % 10, op.f % 100
    integral = op.n == int(op.n)
    if (integral and n10 == 0) or (integral and 11 <= n100 <= 19) or (
        op.v == 2 and 11 <= f100 <= 19
    ):
        return PluralCategory.ZERO
    if (integral and n10 == 1 and n100 != 11) or (op.v == 2 and f10 == 1 and f100 != 11) or (
        op.v != 2 and f10 == 1
    ):
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _arabic(op: PluralOperands) -> PluralCategory:
    n100 = int(op.n) % 100
    integral = op.n == int(op.n)
    if op.n == 0:
        return PluralCategory.ZERO
    if op.n == 1:
        return PluralCategory.ONE
    if op.n == 2:
        return PluralCategory.TWO
    if integral and 3 <= n100 <= 10:
        return PluralCategory.FEW
    if integral and 11 <= n100 <= 99:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _hebrew(op: PluralOperands) -> PluralCategory:
    if (op.i == 1 and op.v == 0) or (op.i == 0 and op.v != 0):
        return PluralCategory.ONE
    if op.i == 2 and op.v == 0:
        return PluralCategory.TWO
    return PluralCategory.OTHER


def _welsh(op: PluralOperands) -> PluralCategory:
    categories = {
        0: PluralCategory.ZERO,
        1: PluralCategory.ONE,
        2: PluralCategory.TWO,
        3: PluralCategory.FEW,
        6: PluralCategory.MANY,
    }
    if op.n == int(op.n) and int(op.n) in categories:
        return categories[int(op.n)]
    return PluralCategory.OTHER


def _irish(op: PluralOperands) -> PluralCategory:
    integral = op.n == int(op.n)
    if op.n == 1:
        return PluralCategory.ONE
    if op.n == 2:
        return PluralCategory.TWO
    if integral and 3 <= op.n <= 6:
        return PluralCategory.FEW
    if integral and 7 <= op.n <= 10:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _no_plural(op: PluralOperands) -> PluralCategory:
    return PluralCategory.OTHER


_RULE_LANGUAGES: Dict[PluralRuleFunc, List[str]] = {
    _one_other: [
        "en", "de", "nl", "it", "sv", "da", "nb", "nn", "no", "fi", "et", "gl",
        "ca", "fy", "ur", "sw", "af",
    ],
    _n_is_one: ["el", "hu", "tr", "bg", "sq", "ka", "az", "kk", "ky", "mn", "ta", "te"],
    _zero_or_one: ["hy", "kab", "pt"],
    _french: ["fr"],
    _spanish: ["es"],
    _slavic: ["ru", "uk", "be"],
    _south_slavic: ["sr", "hr", "bs", "sh"],
    _polish: ["pl"],
    _czech: ["cs", "sk"],
    _romanian: ["ro", "mo"],
    _lithuanian: ["lt"],
    _latvian: ["lv"],
    _arabic: ["ar"],
    _hebrew: ["he", "iw"],
    _welsh: ["cy"],
    _irish: ["ga"],
    _no_plural: ["ja", "ko", "zh", "vi", "th", "id", "ms", "lo", "my", "km"],
}


class PluralRules:
    """CLDR cardinal plural rules provider."""

    def __init__(self) -> None:
        self._cardinal_rules: Dict[str, PluralRuleFunc] = {}
        for rule, languages in _RULE_LANGUAGES.items():
            for language in languages:
                self._cardinal_rules[language] = rule

    def get_category(self, count: Number, tag: LanguageTag) -> PluralCategory:
        """Get the plural category of a count in a language.

        Args:
            count: The number (int, float or Decimal).
            tag: Language the message is rendered in.

        Returns:
            Plural category, OTHER for languages without a rule.
        """
        rule = self._cardinal_rules.get(tag.language, _no_plural)
        return rule(PluralOperands.from_number(count))

    def get_supported_languages(self) -> List[str]:
        """Get language codes with a registered rule."""
        return sorted(self._cardinal_rules)

    def register_rule(self, language: str, rule: PluralRuleFunc) -> None:
        """Register or replace the rule for a primary language subtag."""
        self._cardinal_rules[language.lower()] = rule
