"""
Power frameworks: shared point budgets for several powers.

A framework owns slots, each binding one power plus its allocation
state, and modifiers that apply to the framework's own cost, to its
slots, or to both. Budget problems are reported as AllocationWarning
values rather than raised: players routinely build an over-budget
framework first and fix it afterwards.

Frameworks and slots are built once from their data and never change;
a different allocation means building a new framework.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from ..errors import NotYetImplementedError, PreconditionError
from ..rules.costs import CostInformation, calculate_real_cost
from ..state.schema import FrameworkItem, PowerItem, SlotData, coerce_item
from .modifiers import FrameworkModifier, FrameworkModifierScope, PowerAdvantage, PowerLimitation
from .power import Power

logger = logging.getLogger(__name__)


# ─── Warnings ────────────────────────────────────────────────


class WarningScope(str, Enum):
    """What an allocation warning is about."""
    FRAMEWORK = "framework"
    SLOT = "slot"


@dataclass(frozen=True)
class AllocationWarning:
    """A budget problem the player should fix."""
    message: str
    scope: WarningScope
    slot_id: str | None = None

    @classmethod
    def slot_has_too_many_points_allocated(cls, slot: "Slot") -> "AllocationWarning":
        return cls(
            "This slot has more points allocated to it than it can use",
            WarningScope.SLOT,
            slot.id,
        )

    @classmethod
    def slot_is_too_big_for_control(cls, slot: "Slot") -> "AllocationWarning":
        return cls(
            "Slot active points are larger than the framework's control",
            WarningScope.SLOT,
            slot.id,
        )

    @classmethod
    def slot_is_too_big_for_reserve(cls, slot: "Slot") -> "AllocationWarning":
        return cls(
            "Slot active points are larger than the framework's reserve",
            WarningScope.SLOT,
            slot.id,
        )

    @classmethod
    def too_many_points_allocated(cls) -> "AllocationWarning":
        return cls(
            "More active points are allocated than fit in the framework's reserve",
            WarningScope.FRAMEWORK,
        )

    @classmethod
    def too_many_real_points_allocated(cls) -> "AllocationWarning":
        return cls(
            "More real points are allocated than fit in the framework's pool",
            WarningScope.FRAMEWORK,
        )

    def model_dump(self) -> dict:
        return {
            "message": self.message,
            "scope": self.scope.value,
            "slot_id": self.slot_id,
        }


# ─── Slots ───────────────────────────────────────────────────


class SlotType(str, Enum):
    """
    Allocation semantics of a slot.

    FIXED slots are all-or-nothing but cheaper. VARIABLE slots can be
    given any part of their full cost but cost more.
    """
    FIXED = "fixed"
    VARIABLE = "variable"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def whole_points(value: Any, label: str) -> int:
    """A non-negative whole number of points; stored data may hold 60.0."""
    if not _is_number(value) or value < 0 or not float(value).is_integer():
        raise PreconditionError(f"{label} must be a non-negative integer")
    return int(value)


class Slot:
    """A framework's binding to one power plus its allocation state."""

    def __init__(
        self,
        power: Power,
        *,
        slot_type: SlotType = SlotType.FIXED,
        active: bool = False,
        full_cost: float | None = None,
        allocated_cost: float = 0,
        id: str | None = None,
    ):
        if not isinstance(power, Power):
            raise PreconditionError("power must be a Power")
        try:
            slot_type = SlotType(slot_type)
        except ValueError:
            raise PreconditionError(f"unrecognized slot type {slot_type}") from None
        if full_cost is not None and not _is_number(full_cost):
            raise PreconditionError("full cost must be a number if present")
        if not _is_number(allocated_cost):
            raise PreconditionError("allocated cost must be a number")
        if id is not None and not isinstance(id, str):
            raise PreconditionError("id must be a string if present")

        self._power = power
        self._type = slot_type
        self._active = bool(active)
        self._full_cost = full_cost
        self._allocated_cost = allocated_cost
        self._id = id

    @property
    def power(self) -> Power:
        return self._power

    @property
    def type(self) -> SlotType:
        return self._type

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def full_cost(self) -> float:
        """Most active points the slot can use; the power's active cost unless set."""
        if self._full_cost is not None:
            return self._full_cost
        return self._power.active_cost

    @property
    def allocated_cost(self) -> float:
        """Points of the framework's budget committed to the slot."""
        if self._type == SlotType.FIXED:
            return self.full_cost if self._active else 0
        return self._allocated_cost

    @property
    def is_active(self) -> bool:
        if self._type == SlotType.FIXED:
            return self._active
        return self.allocated_cost > 0

    @property
    def is_fixed(self) -> bool:
        return self._type == SlotType.FIXED

    def with_power(self, power: Power) -> "Slot":
        """The same slot holding a different power."""
        return type(self)(
            power,
            slot_type=self._type,
            active=self._active,
            full_cost=self._full_cost,
            allocated_cost=self._allocated_cost,
            id=self._id,
        )

    @classmethod
    def from_item_data(
        cls,
        id: str | None,
        data: SlotData | Mapping[str, Any],
        powers: Mapping[str, PowerItem | Mapping[str, Any]],
        *,
        framework_id: str,
        framework_name: str,
        default_slot_type: SlotType = SlotType.FIXED,
    ) -> "Slot":
        """Build a slot from stored slot data and the character's powers."""
        data = coerce_item(SlotData, data)
        power = _slot_power(data, powers, framework_id, framework_name)

        fixed = data.fixed if data.fixed is not None else default_slot_type == SlotType.FIXED
        return cls(
            power,
            slot_type=SlotType.FIXED if fixed else SlotType.VARIABLE,
            active=bool(data.active),
            full_cost=data.full_cost,
            allocated_cost=data.allocated_cost,
            id=id,
        )

    def display(self, warnings: Sequence[str] = ()) -> dict:
        """Presentation payload, with this slot's warning messages."""
        return {
            "id": self.id,
            "type": self._type.value,
            "is_active": self.is_active,
            "is_fixed": self.is_fixed,
            "allocated_cost": self.allocated_cost,
            "full_cost": self.full_cost,
            "power": self.power.display(),
            "warnings": list(warnings),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, power={self.power.name!r})"


def _slot_power(
    data: SlotData,
    powers: Mapping[str, PowerItem | Mapping[str, Any]],
    framework_id: str,
    framework_name: str,
) -> Power:
    if len(data.powers) != 1:
        raise NotYetImplementedError("Slots with multiple powers not yet implemented")

    power_id = data.powers[0]
    if power_id not in powers:
        raise PreconditionError(f"No such power {power_id}")
    item = coerce_item(PowerItem, powers[power_id])
    if item.framework != framework_id:
        raise PreconditionError(
            f"Power {item.name} ({item.id}) is not part of framework "
            f"{framework_name} ({framework_id})"
        )
    return Power.from_item_data(item)


# ─── Frameworks ──────────────────────────────────────────────


class Framework:
    """
    Base for Multipowers and VPPs.

    Subclasses set their own budget fields before calling this
    constructor, then check them in `_validate`; the resulting warnings
    are computed once, at construction.
    """

    slot_class: type[Slot] = Slot

    def __init__(
        self,
        name: str,
        *,
        id: str | None = None,
        description: str = "",
        modifiers: Iterable[FrameworkModifier] = (),
        slots: Iterable[Slot] = (),
    ):
        if not isinstance(name, str):
            raise PreconditionError("name must be a string")
        if id is not None and not isinstance(id, str):
            raise PreconditionError("id must be a string if present")
        if not isinstance(description, str):
            raise PreconditionError("description must be a string")

        modifiers = tuple(modifiers)
        for modifier in modifiers:
            if not isinstance(modifier, FrameworkModifier):
                raise PreconditionError("modifiers must be FrameworkModifiers")
        slots = tuple(slots)
        for slot in slots:
            if not isinstance(slot, self.slot_class):
                raise PreconditionError(f"slots must be {self.slot_class.__name__}s")

        self._name = name
        self._id = id
        self._description = description
        self._modifiers = modifiers
        self._slots = self._apply_modifiers_to_slots(slots)

        self._warnings = tuple(self._validate())
        if self._warnings:
            logger.debug(
                "Framework %r has %d allocation warning(s)", self._name, len(self._warnings)
            )

    def _validate(self) -> list[AllocationWarning]:
        return []

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def description(self) -> str:
        return self._description

    @property
    def modifiers(self) -> tuple[FrameworkModifier, ...]:
        return self._modifiers

    @property
    def slots(self) -> tuple[Slot, ...]:
        """Slots, with the framework's slot modifiers applied to their powers."""
        return self._slots

    @property
    def warnings(self) -> tuple[AllocationWarning, ...]:
        return self._warnings

    def _apply_modifiers_to_slots(self, slots: Iterable[Slot]) -> tuple[Slot, ...]:
        return tuple(
            slot.with_power(slot.power.with_framework_modifiers(self._modifiers))
            for slot in slots
        )

    def cost_information_for(self, base: float) -> CostInformation:
        """Cost inputs for the framework's own cost, from its framework-scoped modifiers."""
        advantages = 0
        limitations = 0
        for modifier in self._modifiers:
            if not modifier.scope.applies_to_framework:
                continue
            if modifier.is_a(PowerAdvantage):
                advantages += modifier.value
            elif modifier.is_a(PowerLimitation):
                limitations += abs(modifier.value)
            else:
                raise NotYetImplementedError(
                    "non-advantage/limitation framework modifiers not yet supported"
                )
        return CostInformation(base=base, advantages=advantages, limitations=limitations)

    def real_cost_of(self, base: float) -> int:
        """Real cost of `base` points with the framework's own modifiers."""
        return calculate_real_cost(self.cost_information_for(base))

    @staticmethod
    def modifiers_from_item_data(
        raw_modifiers: Mapping[str, Any],
    ) -> list[FrameworkModifier]:
        return [
            FrameworkModifier.from_item_data(data, id=modifier_id)
            for modifier_id, data in raw_modifiers.items()
        ]

    @classmethod
    def _slots_from_item(
        cls,
        item: FrameworkItem,
        powers: Mapping[str, PowerItem | Mapping[str, Any]],
        default_slot_type: SlotType,
    ) -> list[Slot]:
        return [
            cls.slot_class.from_item_data(
                slot_id,
                data,
                powers,
                framework_id=item.id,
                framework_name=item.name,
                default_slot_type=default_slot_type,
            )
            for slot_id, data in item.framework.slots.items()
        ]

    def display(self) -> dict:
        """Presentation payload: modifiers by scope, slots with their warnings."""
        slot_warnings: dict[str, list[str]] = {}
        framework_warnings = []
        for warning in self._warnings:
            if warning.scope == WarningScope.FRAMEWORK:
                framework_warnings.append(warning.message)
            elif warning.slot_id is None:
                logger.warning("Slot warning with no slot id: %s", warning.message)
            else:
                slot_warnings.setdefault(warning.slot_id, []).append(warning.message)

        modifiers: dict[str, list[dict]] = {
            "framework_only": [],
            "framework_and_slots": [],
            "slots_only": [],
        }
        scope_keys = {
            FrameworkModifierScope.FRAMEWORK_ONLY: "framework_only",
            FrameworkModifierScope.FRAMEWORK_AND_SLOTS: "framework_and_slots",
            FrameworkModifierScope.SLOTS_ONLY: "slots_only",
        }
        for modifier in self._modifiers:
            modifiers[scope_keys[modifier.scope]].append(modifier.modifier.display())

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "modifiers": modifiers,
            "slots": [slot.display(slot_warnings.get(slot.id, ())) for slot in self._slots],
            "warnings": framework_warnings,
        }
