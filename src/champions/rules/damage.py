"""
Damage dice and Damage Classes.

A quantity of effect dice is a whole number of d6 plus an optional
adjustment: half a die, half a die less one pip, or one pip either way.
How many Damage Classes (DC) such a quantity is worth depends on what the
effect pays per die, so conversion goes through a table keyed by AP per
die. Each table column lists one cycle of dice steps; every step adds one
DC and every full cycle adds `period` whole dice.

Displayed dice counts fold the adjustment into a decimal:
    2d6   -> 2      2½d6   -> 2.5     2½d6-1 -> 2.4
    2d6+1 -> 2.1    2d6-1  -> 1.9
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from ..errors import DamageError


class DieAdjustment(float, Enum):
    """Adjustment carried on top of the whole dice."""
    FULL = 0
    HALF = 0.5
    HALF_MINUS_ONE = -0.5
    PLUS_ONE = 1
    MINUS_ONE = -1


# Fraction added to the whole dice when displaying each adjustment
DISPLAY_OFFSETS: dict[DieAdjustment, float] = {
    DieAdjustment.FULL: 0,
    DieAdjustment.HALF: 0.5,
    DieAdjustment.HALF_MINUS_ONE: 0.4,
    DieAdjustment.PLUS_ONE: 0.1,
    DieAdjustment.MINUS_ONE: -0.1,
}

# Tenths of a displayed dice count -> (whole dice offset, adjustment)
FRACTION_ENCODINGS: dict[int, tuple[int, DieAdjustment]] = {
    0: (0, DieAdjustment.FULL),
    1: (0, DieAdjustment.PLUS_ONE),
    4: (0, DieAdjustment.HALF_MINUS_ONE),
    5: (0, DieAdjustment.HALF),
    9: (1, DieAdjustment.MINUS_ONE),
}


class DiceStep(NamedTuple):
    """One DC worth of dice inside a table cycle."""
    dice: int
    adjustment: DieAdjustment


class DamageClassColumn(NamedTuple):
    """Dice progression for one AP-per-die value."""
    period: int
    steps: Sequence[DiceStep]


def _steps(*pairs: tuple[int, DieAdjustment]) -> tuple[DiceStep, ...]:
    return tuple(DiceStep(dice, adjustment) for dice, adjustment in pairs)


_FULL = DieAdjustment.FULL
_HALF = DieAdjustment.HALF
_HALF_MINUS_ONE = DieAdjustment.HALF_MINUS_ONE
_PLUS_ONE = DieAdjustment.PLUS_ONE
_MINUS_ONE = DieAdjustment.MINUS_ONE

# 5 AP per die is linear (1 DC per die) and handled separately.
DAMAGE_CLASS_TABLE: Mapping[float, DamageClassColumn] = MappingProxyType({
    5: DamageClassColumn(1, _steps((1, _FULL))),
    6.25: DamageClassColumn(4, _steps(
        (0, _HALF), (1, _HALF), (2, _FULL), (3, _FULL), (4, _FULL),
    )),
    7.5: DamageClassColumn(4, _steps(
        (0, _HALF), (1, _FULL), (2, _FULL), (2, _HALF), (3, _FULL), (4, _FULL),
    )),
    10: DamageClassColumn(1, _steps((0, _HALF), (1, _FULL))),
    12.5: DamageClassColumn(2, _steps(
        (0, _PLUS_ONE), (0, _HALF), (1, _FULL), (1, _HALF), (2, _FULL),
    )),
    15: DamageClassColumn(1, _steps((0, _PLUS_ONE), (0, _HALF), (1, _FULL))),
    20: DamageClassColumn(1, _steps(
        (0, _PLUS_ONE), (0, _HALF), (1, _MINUS_ONE), (1, _FULL),
    )),
    22.5: DamageClassColumn(2, _steps(
        (0, _PLUS_ONE), (0, _HALF_MINUS_ONE), (0, _HALF), (1, _MINUS_ONE),
        (1, _FULL), (1, _PLUS_ONE), (1, _HALF), (2, _MINUS_ONE), (2, _FULL),
    )),
})


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coarse_dice(dc: float, ap_per_die: float) -> int:
    # Rounded first so k * ap / ap never lands a hair above k
    return math.ceil(round(dc / ap_per_die, 9))


@dataclass(frozen=True)
class Damage:
    """
    Effect dice bought at a given AP per die.

    Unsupported AP-per-die values (6 for Aid, 3 for Dispel, anything
    house-ruled) have no DC progression; their `dc` is the coarse cost
    ceil(dice) * ap_per_die and `from_dcs` inverts it to whole dice.

    Dice that fall between a column's steps (1d6 at 6.25 AP per die) are
    worth dice * ap_per_die / 5 DC, plus the position of the first step
    carrying their adjustment. An adjustment the column never uses is
    rejected.
    """
    base_dice: int
    ap_per_die: float = 5
    adjustment: DieAdjustment = DieAdjustment.FULL

    def __post_init__(self):
        if not _is_number(self.base_dice) or not float(self.base_dice).is_integer():
            raise DamageError(f"base dice must be a whole number, got {self.base_dice!r}")
        if self.base_dice < 0:
            raise DamageError(f"base dice must not be negative, got {self.base_dice}")
        if not _is_number(self.ap_per_die) or self.ap_per_die <= 0:
            raise DamageError(f"AP per die must be a positive number, got {self.ap_per_die!r}")
        if not _is_number(self.adjustment):
            raise DamageError(f"adjustment must be a number, got {self.adjustment!r}")
        try:
            adjustment = DieAdjustment(self.adjustment)
        except ValueError:
            raise DamageError(
                f"adjustment must be one of 0, ±0.5 or ±1, got {self.adjustment}"
            ) from None

        object.__setattr__(self, "base_dice", int(self.base_dice))
        object.__setattr__(self, "adjustment", adjustment)
        # Rejects combinations the table cannot express
        self.dc  # noqa: B018

    @staticmethod
    def supports_ap_per_die(ap_per_die: float) -> bool:
        """Whether the DC table has a progression for this AP per die."""
        return ap_per_die in DAMAGE_CLASS_TABLE

    @property
    def dice(self) -> float:
        """Conventional decimal dice count (2½d6-1 -> 2.4)."""
        return self.base_dice + DISPLAY_OFFSETS[self.adjustment]

    @property
    def has_half(self) -> bool:
        """Whether a half die is rolled."""
        return self.adjustment in (DieAdjustment.HALF, DieAdjustment.HALF_MINUS_ONE)

    @property
    def plus_or_minus(self) -> int:
        """Pip adjustment applied to the roll total."""
        if self.adjustment == DieAdjustment.PLUS_ONE:
            return 1
        if self.adjustment in (DieAdjustment.MINUS_ONE, DieAdjustment.HALF_MINUS_ONE):
            return -1
        return 0

    @property
    def dice_string(self) -> str:
        """Human-readable dice ("2½d6", "4d6+1", "1d6-1")."""
        if self.adjustment == DieAdjustment.HALF:
            return f"{self._whole_prefix()}½d6"
        if self.adjustment == DieAdjustment.HALF_MINUS_ONE:
            return f"{self._whole_prefix()}½d6-1"
        if self.adjustment == DieAdjustment.PLUS_ONE:
            return f"{self.base_dice}d6+1"
        if self.adjustment == DieAdjustment.MINUS_ONE:
            return f"{self.base_dice}d6-1"
        return f"{self.base_dice}d6"

    def _whole_prefix(self) -> str:
        return str(self.base_dice) if self.base_dice else ""

    @property
    def dc(self) -> float:
        """Damage Classes this many dice are worth at this AP per die."""
        column = DAMAGE_CLASS_TABLE.get(self.ap_per_die)
        if column is None:
            return math.ceil(self.dice) * self.ap_per_die
        if self.ap_per_die == 5:
            return self.base_dice + (0.5 if self.adjustment != DieAdjustment.FULL else 0)
        if self.base_dice == 0 and self.adjustment == DieAdjustment.FULL:
            return 0

        first_index = None
        for index, step in enumerate(column.steps):
            if step.adjustment != self.adjustment:
                continue
            if first_index is None:
                first_index = index
            cycles, remainder = divmod(self.base_dice - step.dice, column.period)
            if remainder == 0 and cycles >= 0:
                return cycles * len(column.steps) + index + 1

        # Off the cycle: whole dice at face value, plus the adjustment's first step
        full_dice = self.base_dice * self.ap_per_die / 5
        if self.adjustment == DieAdjustment.FULL:
            return full_dice
        if first_index is None:
            raise DamageError(
                f"{self.dice_string} cannot be bought at {self.ap_per_die} AP per die",
                ap_per_die=self.ap_per_die,
            )
        return full_dice + first_index + 1

    def add_damage_classes(self, damage_classes: float) -> "Damage":
        """
        New Damage worth `damage_classes` more (or fewer) DC.

        Dice off a column's cycle are worth a fractional DC; the result
        settles on the table step at or below the new total.
        """
        dc = self.dc + damage_classes
        if self.ap_per_die != 5 and self.supports_ap_per_die(self.ap_per_die):
            if not float(self.dc).is_integer():
                dc = math.floor(dc)
        return Damage.from_dcs(dc, self.ap_per_die)

    @classmethod
    def from_dcs(cls, dc: float, ap_per_die: float = 5) -> "Damage":
        """
        Dice worth exactly `dc` Damage Classes.

        Args:
            dc: Damage Classes; zero or less gives no dice
            ap_per_die: What the effect pays per die

        Returns:
            The Damage whose `dc` equals the request
        """
        if dc <= 0:
            return cls(0, ap_per_die)

        column = DAMAGE_CLASS_TABLE.get(ap_per_die)
        if column is None:
            return cls(_coarse_dice(dc, ap_per_die), ap_per_die)

        if ap_per_die == 5:
            dice = math.floor(dc)
            remainder = dc - dice
            if remainder == 0:
                return cls(dice, ap_per_die)
            if remainder == 0.5:
                return cls(dice, ap_per_die, DieAdjustment.HALF)
            raise DamageError(f"{dc} is not a whole or half DC", ap_per_die=ap_per_die)

        if not float(dc).is_integer():
            raise DamageError(
                f"{dc} is not a whole number of DC at {ap_per_die} AP per die",
                ap_per_die=ap_per_die,
            )
        cycles, index = divmod(int(dc) - 1, len(column.steps))
        step = column.steps[index]
        return cls(cycles * column.period + step.dice, ap_per_die, step.adjustment)

    @classmethod
    def from_dice(cls, dice: float, ap_per_die: float = 5) -> "Damage":
        """
        Parse a decimal dice count (3.9 -> 4d6-1).

        Only fractions of .0, .1, .4, .5 and .9 encode an adjustment;
        anything else is rejected.
        """
        if not _is_number(dice) or dice < 0:
            raise DamageError(f"dice must be a non-negative number, got {dice!r}")

        whole = math.floor(dice)
        tenths = math.floor((dice - whole) * 10 + 0.5)

        encoding = FRACTION_ENCODINGS.get(tenths)
        if encoding is None:
            raise DamageError(f"{dice} does not encode a dice adjustment")

        offset, adjustment = encoding
        return cls(whole + offset, ap_per_die, adjustment)


# ─── Rolled dice ─────────────────────────────────────────────
#
# These count faces that were already rolled elsewhere. A half die is
# passed as the face of the d6 rolled for it.


def _half_die_count(half_die: int | None) -> int:
    return math.ceil(half_die / 2) if half_die else 0


def count_normal_body(faces: Sequence[int], half_die: int | None = None) -> int:
    """BODY from a normal attack: 1 counts 0, 6 counts 2, others 1."""
    body = 0
    for face in faces:
        if face == 1:
            continue
        body += 2 if face == 6 else 1
    if half_die is not None and half_die >= 4:
        body += 1
    return body


def count_normal_stun(
    faces: Sequence[int],
    half_die: int | None = None,
    plus_or_minus: int = 0,
) -> int:
    """STUN from a normal attack: the face total plus adjustments."""
    return sum(faces) + plus_or_minus + _half_die_count(half_die)


def count_normal_damage(
    damage: Damage,
    faces: Sequence[int],
    half_die: int | None = None,
) -> tuple[int, int]:
    """(BODY, STUN) for normal damage rolled with `damage`'s dice."""
    half_die = half_die if damage.has_half else None
    return (
        count_normal_body(faces, half_die),
        count_normal_stun(faces, half_die, damage.plus_or_minus),
    )


def count_killing_body(
    faces: Sequence[int],
    half_die: int | None = None,
    plus_or_minus: int = 0,
) -> int:
    """BODY from a killing attack: the face total plus adjustments."""
    return sum(faces) + _half_die_count(half_die) + plus_or_minus


def count_killing_stun(body: int, multiplier: int) -> int:
    """STUN from a killing attack: BODY times the STUN multiplier."""
    return body * multiplier


def count_killing_damage(
    damage: Damage,
    faces: Sequence[int],
    multiplier: int,
    half_die: int | None = None,
) -> tuple[int, int]:
    """(BODY, STUN) for killing damage rolled with `damage`'s dice."""
    half_die = half_die if damage.has_half else None
    body = count_killing_body(faces, half_die, damage.plus_or_minus)
    return body, count_killing_stun(body, multiplier)
