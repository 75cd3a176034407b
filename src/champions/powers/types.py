"""
Power types.

A standard power type comes from the rulebook catalog below and knows
its categories and how it is priced. A custom power type is anything a
player invents; it has only a name, and its categories come from the
power's own data.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, NamedTuple

from ..errors import PreconditionError
from ..rules.categories import PowerCategory
from ..rules.costs import CostPerDie, CostPerMeter, CostStructure, FixedCost

ATTACK = PowerCategory.ATTACK
MOVEMENT = PowerCategory.MOVEMENT


class PowerData(NamedTuple):
    """A catalog entry."""
    name: str
    categories: frozenset[PowerCategory] = frozenset()
    cost: CostStructure | None = None


def _attack(name: str, per_die: float) -> PowerData:
    return PowerData(name, frozenset({ATTACK}), CostPerDie(per_die))


def _movement(name: str, per_meter: float) -> PowerData:
    return PowerData(name, frozenset({MOVEMENT}), CostPerMeter(per_meter))


def _fixed(name: str, cost: float) -> PowerData:
    return PowerData(name, frozenset(), FixedCost(cost))


POWER_DATA: tuple[PowerData, ...] = (
    PowerData("Absorption"),
    _attack("Aid", 6),
    PowerData("Barrier"),
    _attack("Blast", 5),
    _fixed("Cannot Be Stunned", 15),
    PowerData("Change Environment"),
    PowerData("Characteristics"),
    PowerData("Clairsentience"),
    PowerData("Clinging"),
    PowerData("Damage Negation"),
    PowerData("Damage Reduction"),
    PowerData("Darkness"),
    _fixed("Deflection", 20),
    PowerData("Density Increase"),
    _fixed("Desolidification", 40),
    _attack("Dispel", 3),
    _fixed("Does not Bleed", 15),
    _attack("Drain", 10),
    PowerData("Duplication"),
    PowerData("Endurance Reserve"),
    PowerData("Enhanced Senses"),
    _attack("Entangle", 10),
    PowerData("Extra-Dimensional Movement"),
    _fixed("Extra Limbs", 5),
    PowerData("FTL Travel"),
    PowerData("Flash"),
    PowerData("Flash Defense"),
    _movement("Flight", 1),
    PowerData("Growth"),
    _attack("Hand-To-Hand Attack", 5),
    _attack("Healing", 10),
    PowerData("Images"),
    PowerData("Invisibility"),
    _attack("Killing Attack", 15),
    _movement("Knockback Resistance", 1),
    _movement("Leaping", 0.5),
    PowerData("Life Support"),
    _attack("Luck", 5),
    _attack("Mental Blast", 10),
    PowerData("Mental Defense"),
    _attack("Mental Illusions", 5),
    _attack("Mind Control", 5),
    PowerData("Mind Link"),
    _attack("Mind Scan", 5),
    PowerData("Multiform"),
    _fixed("No Hit Locations", 10),
    PowerData("Power Defense"),
    PowerData("Reflection"),
    PowerData("Regeneration"),
    PowerData("Resistant Protection"),
    _movement("Running", 1),
    PowerData("Shape Shift"),
    PowerData("Shrinking"),
    PowerData("Skills"),
    _movement("Stretching", 1),
    PowerData("Summon"),
    _movement("Swimming", 0.5),
    _movement("Swinging", 0.5),
    PowerData("Takes No STUN"),
    _attack("Telepathy", 5),
    PowerData("Telekinesis"),
    _movement("Teleportation", 1),
    PowerData("Transform"),
    PowerData("Tunneling"),
)


class PowerType(ABC):
    """What kind of power something is."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def categories(self) -> frozenset[PowerCategory]:
        """Categories every power of this type has."""
        ...

    @property
    def cost_structure(self) -> CostStructure | None:
        """How powers of this type are priced, if the type knows."""
        return None

    @property
    def is_standard(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StandardPowerType(PowerType):
    """A power type from the rulebook catalog. One shared instance per name."""

    def __init__(self, data: PowerData):
        self._data = data

    @classmethod
    def get(cls, name: str) -> "StandardPowerType":
        """Look up a standard power type by its exact name."""
        try:
            return STANDARD_POWER_TYPES[name]
        except KeyError:
            raise PreconditionError(f'There is no standard power named "{name}"') from None

    @property
    def name(self) -> str:
        return self._data.name

    @property
    def categories(self) -> frozenset[PowerCategory]:
        return self._data.categories

    @property
    def cost_structure(self) -> CostStructure | None:
        return self._data.cost

    @property
    def is_standard(self) -> bool:
        return True


class CustomPowerType(PowerType):
    """A player-invented power type."""

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise PreconditionError("name must be a string")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def categories(self) -> frozenset[PowerCategory]:
        return frozenset()

    def __eq__(self, other):
        if not isinstance(other, CustomPowerType):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash((CustomPowerType, self._name))


STANDARD_POWER_TYPES: Mapping[str, StandardPowerType] = MappingProxyType({
    data.name: StandardPowerType(data) for data in POWER_DATA
})

POWER_NAMES: tuple[str, ...] = tuple(data.name for data in POWER_DATA)


def power_type_for(name: str, is_standard: bool) -> PowerType:
    """The power type a stored power refers to."""
    if is_standard:
        return StandardPowerType.get(name)
    return CustomPowerType(name)
