"""
Characters: characteristics, movement, powers and frameworks together.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .errors import PreconditionError
from .powers.movement import ModifiableValue, MovementMode
from .powers.multipowers import Multipower
from .powers.power import Power
from .powers.types import StandardPowerType
from .powers.vpps import VPP
from .rules.categories import PowerCategory
from .rules.characteristics import Characteristic, by_name
from .state.schema import FrameworkItem, PowerItem, coerce_item


@dataclass(frozen=True)
class CharacteristicValue:
    """
    A character's value for one characteristic.

    For bought characteristics `value` is the base value; for resources
    such as END and STUN it is the current value.
    """
    value: float
    modifier: float = 0

    @property
    def total(self) -> float:
        return self.value + self.modifier


DEFAULT_MOVEMENT_MODES: tuple[MovementMode, ...] = (
    MovementMode("Running", StandardPowerType.get("Running"), ModifiableValue(12)),
    MovementMode("Leaping", StandardPowerType.get("Leaping"), ModifiableValue(4)),
    MovementMode("Swimming", StandardPowerType.get("Swimming"), ModifiableValue(4)),
)

# Stored movement keys -> the standard power each one is
MOVEMENT_TYPES_BY_NAME: dict[str, str] = {
    "run": "Running",
    "leap": "Leaping",
    "swim": "Swimming",
}


class Character:
    """A HERO System 6E character."""

    def __init__(
        self,
        name: str,
        *,
        characteristics: Mapping[str, CharacteristicValue] | None = None,
        movement_modes: Iterable[MovementMode] = DEFAULT_MOVEMENT_MODES,
        powers: Iterable[Power] = (),
        multipowers: Iterable[Multipower] = (),
        vpps: Iterable[VPP] = (),
    ):
        if not isinstance(name, str):
            raise PreconditionError("A character's name must be a string")
        self.name = name

        self._characteristics: dict[Characteristic, CharacteristicValue] = {}
        for char_name, value in (characteristics or {}).items():
            characteristic = by_name(char_name)
            if characteristic is None:
                raise PreconditionError(f"No such characteristic: {char_name}")
            self._characteristics[characteristic] = value

        self._powers = tuple(sorted(powers, key=lambda power: power.name))
        self._multipowers = tuple(multipowers)
        self._vpps = tuple(vpps)
        self._movement_modes = tuple(movement_modes) + tuple(
            power.movement_mode
            for power in self._powers
            if power.has_category(PowerCategory.MOVEMENT)
        )

    @classmethod
    def from_item_data(
        cls,
        name: str,
        *,
        characteristics: Mapping[str, Mapping[str, Any]] | None = None,
        movements: Mapping[str, Mapping[str, Any]] | None = None,
        powers: Mapping[str, PowerItem | Mapping[str, Any]] | None = None,
        multipowers: Iterable[FrameworkItem | Mapping[str, Any]] = (),
        vpps: Iterable[FrameworkItem | Mapping[str, Any]] = (),
    ) -> "Character":
        """
        Build a character from stored data.

        Args:
            name: The character's name
            characteristics: {"str": {"value": 15, "modifier": 0}, ...}
            movements: {"run": {"value": 12, "modifier": 0}, ...}; defaults
                to the standard movement modes when absent
            powers: Every power item by id, framework members included
            multipowers: Multipower items
            vpps: VPP items

        Returns:
            The character; framework member powers appear only in their
            frameworks, not among the top-level powers
        """
        powers = {power_id: coerce_item(PowerItem, item) for power_id, item in (powers or {}).items()}

        movement_modes: Iterable[MovementMode] = DEFAULT_MOVEMENT_MODES
        if movements is not None:
            movement_modes = []
            for mode, data in movements.items():
                if mode not in MOVEMENT_TYPES_BY_NAME:
                    raise PreconditionError(f"unrecognized movement mode {mode}")
                movement_modes.append(MovementMode(
                    mode.capitalize(),
                    StandardPowerType.get(MOVEMENT_TYPES_BY_NAME[mode]),
                    ModifiableValue(data.get("value", 0), data.get("modifier", 0)),
                ))

        return cls(
            name,
            characteristics={
                char_name: CharacteristicValue(data.get("value", 0), data.get("modifier", 0))
                for char_name, data in (characteristics or {}).items()
            },
            movement_modes=movement_modes,
            powers=[
                Power.from_item_data(item) for item in powers.values() if not item.framework
            ],
            multipowers=[Multipower.from_item_data(item, powers) for item in multipowers],
            vpps=[VPP.from_item_data(item, powers) for item in vpps],
        )

    @property
    def movement_modes(self) -> tuple[MovementMode, ...]:
        return self._movement_modes

    @property
    def powers(self) -> tuple[Power, ...]:
        """Top-level powers, sorted by name."""
        return self._powers

    @property
    def multipowers(self) -> tuple[Multipower, ...]:
        return self._multipowers

    @property
    def vpps(self) -> tuple[VPP, ...]:
        return self._vpps

    def characteristic(self, characteristic: Characteristic) -> CharacteristicValue:
        """The character's value for a characteristic."""
        try:
            return self._characteristics[characteristic]
        except KeyError:
            raise PreconditionError(
                f"{self.name} has no value for {characteristic.abbreviation}"
            ) from None

    def derived_attributes(self) -> dict[str, dict[str, Any]]:
        """Derived attributes of every characteristic the character has, by abbreviation."""
        return {
            characteristic.abbreviation: characteristic.derived_attributes(value.total)
            for characteristic, value in self._characteristics.items()
            if characteristic.attributes
        }

    def point_totals(self) -> dict[str, int]:
        """Character points spent, by category."""
        return {
            "powers": (
                sum(power.real_cost for power in self._powers)
                + sum(multipower.total_cost for multipower in self._multipowers)
                + sum(vpp.total_cost for vpp in self._vpps)
            ),
        }
