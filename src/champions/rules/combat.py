"""
Attack resolution numbers.

An attack rolls 3d6 against 11 + OCV - DCV. These functions compute the
numbers involved; they never roll dice.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ..errors import PreconditionError
from ..state.schema import AttackData, coerce_item
from . import characteristics
from .characteristics import Characteristic
from .damage import Damage

# A 3 always hits and an 18 always misses
MIN_TARGET_NUMBER = 3
MAX_TARGET_NUMBER = 17


def highest_dcv_hit(ocv: int, roll: int) -> float:
    """
    Highest DCV an attacker hits with a given attack roll.

    Args:
        ocv: The attacker's OCV
        roll: The attacker's 3d6 attack roll

    Returns:
        OCV + 11 - roll, or +/- infinity for the automatic hit and miss
    """
    if roll == 3:
        return math.inf
    if roll == 18:
        return -math.inf
    return ocv + 11 - roll


def target_number_to_hit(ocv: int, dcv: int) -> int:
    """Roll needed to hit a DCV with an OCV, clamped to 3..17."""
    target = 11 + ocv - dcv
    return max(MIN_TARGET_NUMBER, min(MAX_TARGET_NUMBER, target))


class DamageType(str, Enum):
    """How an attack's dice are counted."""
    NORMAL = "normal"
    KILLING = "killing"
    EFFECT = "effect"


OFFENSIVE_CVS = (characteristics.OCV, characteristics.OMCV)
DEFENSIVE_CVS = (characteristics.DCV, characteristics.DMCV)


@dataclass(frozen=True)
class Attack:
    """The attack payload of a power: combat values, dice and defense."""
    name: str
    ocv: Characteristic
    dcv: Characteristic
    damage: Damage
    damage_type: DamageType = DamageType.NORMAL
    defense: str = ""
    description: str = ""
    id: str | None = None

    def __post_init__(self):
        if self.ocv not in OFFENSIVE_CVS:
            raise PreconditionError("Invalid OCV, must be either OCV or OMCV")
        if self.dcv not in DEFENSIVE_CVS:
            raise PreconditionError("Invalid DCV, must be either DCV or DMCV")
        if not isinstance(self.damage, Damage):
            raise PreconditionError("damage must be a Damage")
        try:
            object.__setattr__(self, "damage_type", DamageType(self.damage_type))
        except ValueError:
            raise PreconditionError(f"unknown damage type {self.damage_type!r}") from None
        if not isinstance(self.defense, str):
            raise PreconditionError("defense must be a string")

    @classmethod
    def from_item_data(
        cls,
        name: str,
        data: AttackData | Mapping[str, Any],
        id: str | None = None,
    ) -> "Attack":
        """Build an attack from a power's stored attack data."""
        data = coerce_item(AttackData, data)

        return cls(
            name=name,
            ocv=characteristics.by_name(data.cv.offensive),
            dcv=characteristics.by_name(data.cv.defensive),
            damage=Damage.from_dice(data.damage.dice, data.damage.ap_per_die),
            damage_type=data.damage.type.lower(),
            defense=data.defense,
            description=data.description,
            id=id,
        )

    def display(self) -> dict:
        """Presentation payload."""
        return {
            "ocv": self.ocv.abbreviation,
            "dcv": self.dcv.abbreviation,
            "dice": self.damage.dice,
            "dice_string": self.damage.dice_string,
            "dc": self.damage.dc,
            "damage_type": self.damage_type.value,
            "defense": self.defense,
        }
