"""
Display strings for tagged numbers.

A modifier value is an ordinary number for arithmetic; its kind only
decides how it is rendered on a character sheet ("+5 CP", "+1½", "-¼").
"""

import re
from dataclasses import dataclass
from enum import Enum


class ModifierKind(str, Enum):
    """How a tagged number is rendered."""
    PLAIN = "plain"
    ADDER = "adder"
    ADVANTAGE = "advantage"
    LIMITATION = "limitation"


FRACTION_GLYPHS: dict[str, str] = {
    ".5": "½",
    ".25": "¼",
    ".75": "¾",
}

_LEADING_ZERO = re.compile(r"^(-?)0")


def format_number(value: float) -> str:
    """Ordinary decimal string, dropping the fraction of whole numbers."""
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _format_fractional(value: float, zero: str) -> str:
    ordinary = format_number(value)
    if ordinary == "0":
        return zero

    for decimal, glyph in FRACTION_GLYPHS.items():
        if ordinary.endswith(decimal):
            ordinary = ordinary[: -len(decimal)] + glyph
            break

    ordinary = _LEADING_ZERO.sub(r"\1", ordinary)
    if not ordinary.startswith("-"):
        ordinary = "+" + ordinary
    return ordinary


def format_tagged(kind: ModifierKind, value: float) -> str:
    """
    Render a number according to its kind.

    Args:
        kind: Which rendering rule to use
        value: The number to render

    Returns:
        "+N CP" for adders, "+1½"/"-2¾" style for advantages and
        limitations ("+0" and "-0" for zero), the plain number otherwise
    """
    if kind == ModifierKind.ADDER:
        return f"+{format_number(value)} CP"
    if kind == ModifierKind.ADVANTAGE:
        return _format_fractional(value, "+0")
    if kind == ModifierKind.LIMITATION:
        return _format_fractional(value, "-0")
    return format_number(value)


@dataclass(frozen=True)
class TaggedNumber:
    """A number paired with the kind that decides its string form."""
    kind: ModifierKind
    value: float

    def __str__(self) -> str:
        return format_tagged(self.kind, self.value)

    def __float__(self) -> float:
        return float(self.value)
