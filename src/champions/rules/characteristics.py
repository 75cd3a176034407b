"""
Characteristic registry.

The characteristics are a fixed catalog built once at import time. Each
one knows its abbreviation, full name, whether it can be rolled against,
and the attributes derived from its value (STR -> lifting weight, SPD ->
phases, and so on).
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple

from ..errors import PreconditionError
from .rounding import favouring_higher


DerivedAttribute = Callable[[int], Any]


@dataclass(frozen=True)
class Characteristic:
    """A base character attribute and the values derived from it."""
    abbreviation: str
    name: str
    is_rollable: bool = False
    attributes: Mapping[str, DerivedAttribute] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def target_number(self, value: float) -> int:
        """Roll needed on 3d6 for a characteristic roll (9 + value/5)."""
        return favouring_higher(9 + value / 5)

    def derived_attributes(self, value: int) -> dict[str, Any]:
        """All derived attributes for a characteristic value."""
        return {name: fn(value) for name, fn in self.attributes.items()}


# ─── Derived attributes ──────────────────────────────────────


def characteristic_effect_dice(points: int) -> float:
    """
    Effect dice from a characteristic: STR -> HTH damage, PRE -> presence
    attack. Every 5 points is a die; 3 or 4 left over is half a die.
    """
    whole_dice = math.floor(points / 5)
    if points % 5 >= 3:
        return whole_dice + 0.5
    return whole_dice


class Weight(NamedTuple):
    """A lifting weight with its unit."""
    value: float
    unit: str


LIFTING_WEIGHT_TABLE: tuple[tuple[int, float, str], ...] = (
    # STR, weight, unit
    (0, 0, "kg"),
    (1, 8, "kg"),
    (2, 16, "kg"),
    (3, 25, "kg"),
    (4, 38, "kg"),
    (5, 50, "kg"),
    (10, 100, "kg"),
    (15, 200, "kg"),
    (20, 400, "kg"),
    (25, 800, "kg"),
    (30, 1600, "kg"),
    (35, 3200, "kg"),
    (40, 6400, "kg"),
    (45, 12.5, "tons"),
    (50, 25, "tons"),
    (55, 50, "tons"),
    (60, 100, "tons"),
    (65, 200, "tons"),
    (70, 400, "tons"),
    (75, 800, "tons"),
    (80, 1600, "tons"),
    (85, 3200, "tons"),
    (90, 6400, "tons"),
    (95, 12500, "tons"),
    (100, 25000, "tons"),
)

KG_PER_TON = 1000


def lifting_weight(strength: int) -> Weight:
    """
    Maximum weight lifted with a given STR.

    Between table rows: 1-2 over a multiple of 5 lifts the lesser row, 3
    over lifts halfway (in kg), 4 over lifts the greater row. Past STR 100
    the chart gives no answer, so the top row is returned with a "?" unit.
    """
    if not isinstance(strength, int) or isinstance(strength, bool):
        raise PreconditionError("STR must be an integer")
    if strength < 0:
        raise PreconditionError("STR must not be negative")

    for index, (row_strength, weight, unit) in enumerate(LIFTING_WEIGHT_TABLE):
        if strength == row_strength:
            return Weight(weight, unit)
        if strength > row_strength:
            continue

        _, lesser_weight, lesser_unit = LIFTING_WEIGHT_TABLE[index - 1]
        remainder = strength % 5
        if remainder in (1, 2):
            return Weight(lesser_weight, lesser_unit)
        if remainder == 3:
            if lesser_unit == unit:
                return Weight((lesser_weight + weight) / 2, unit)
            return Weight((lesser_weight + weight * KG_PER_TON) / 2, "kg")
        return Weight(weight, unit)

    _, top_weight, top_unit = LIFTING_WEIGHT_TABLE[-1]
    return Weight(top_weight, top_unit + "?")


SPEED_CHART: Mapping[int, tuple[int, ...]] = MappingProxyType({
    0: (),
    1: (7,),
    2: (6, 12),
    3: (4, 8, 12),
    4: (3, 6, 9, 12),
    5: (3, 5, 8, 10, 12),
    6: (2, 4, 6, 8, 10, 12),
    7: (2, 4, 6, 7, 9, 11, 12),
    8: (2, 3, 5, 6, 8, 9, 11, 12),
    9: (2, 3, 4, 6, 7, 8, 10, 11, 12),
    10: (2, 3, 4, 5, 6, 8, 9, 10, 11, 12),
    11: (2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12),
    12: (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12),
})

MAX_SPEED = 12


def phases(speed: int) -> tuple[int, ...]:
    """Segments of the 12-segment turn in which a character acts."""
    if not isinstance(speed, int) or isinstance(speed, bool) or speed < 0:
        raise PreconditionError("SPD must be a non-negative integer")
    return SPEED_CHART[min(speed, MAX_SPEED)]


# ─── Registry ────────────────────────────────────────────────

STR = Characteristic("STR", "Strength", is_rollable=True, attributes={
    "hth_damage": characteristic_effect_dice,
    "lifting_weight": lifting_weight,
})
DEX = Characteristic("DEX", "Dexterity", is_rollable=True)
CON = Characteristic("CON", "Constitution", is_rollable=True)
INT = Characteristic("INT", "Intelligence", is_rollable=True)
EGO = Characteristic("EGO", "Ego", is_rollable=True)
PRE = Characteristic("PRE", "Presence", is_rollable=True, attributes={
    "presence_attack_dice": characteristic_effect_dice,
})

OCV = Characteristic("OCV", "Offensive Combat Value")
DCV = Characteristic("DCV", "Defensive Combat Value")
OMCV = Characteristic("OMCV", "Offensive Mental Combat Value")
DMCV = Characteristic("DMCV", "Defensive Mental Combat Value")

SPD = Characteristic("SPD", "Speed", attributes={"phases": phases})

PD = Characteristic("PD", "Physical Defense")
ED = Characteristic("ED", "Energy Defense")
rPD = Characteristic("rPD", "Resistant Physical Defense")
rED = Characteristic("rED", "Resistant Energy Defense")

REC = Characteristic("REC", "Recovery")
END = Characteristic("END", "Endurance")
BODY = Characteristic("BODY", "Body")
STUN = Characteristic("STUN", "Stun")

CHARACTERISTICS: tuple[Characteristic, ...] = (
    STR, DEX, CON, INT, EGO, PRE,
    OCV, DCV, OMCV, DMCV,
    SPD,
    PD, ED, rPD, rED,
    REC, END, BODY, STUN,
)


def _build_name_index() -> Mapping[str, Characteristic]:
    index: dict[str, Characteristic] = {}
    for characteristic in CHARACTERISTICS:
        index[characteristic.abbreviation.lower()] = characteristic
        index[characteristic.name.lower()] = characteristic
    return MappingProxyType(index)


_BY_NAME = _build_name_index()


def by_name(name: str) -> Characteristic | None:
    """Look up a characteristic by abbreviation or full name, ignoring case."""
    return _BY_NAME.get(name.lower())
