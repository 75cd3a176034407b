"""
Multipowers.

A Multipower buys a reserve of active points that its slots share. Fixed
slots cost a tenth of their power's real cost and are either fully on or
off; variable slots cost a fifth and take any part of their full cost.
"""

from typing import Any, Iterable, Mapping

from ..errors import PreconditionError
from ..rules.rounding import favouring_lower
from ..state.schema import FrameworkItem, PowerItem, coerce_item
from .frameworks import AllocationWarning, Framework, Slot, SlotType, whole_points
from .modifiers import FrameworkModifier

SLOT_COST_DIVISORS: dict[SlotType, int] = {
    SlotType.FIXED: 10,
    SlotType.VARIABLE: 5,
}


class MultipowerSlot(Slot):
    """A Multipower slot, priced at a fraction of its power's real cost."""

    @property
    def cost(self) -> int:
        return favouring_lower(self.power.real_cost / SLOT_COST_DIVISORS[self.type])

    def display(self, warnings=()) -> dict:
        payload = super().display(warnings)
        payload["cost"] = self.cost
        return payload


class Multipower(Framework):
    """A framework with a reserve of active points shared by its slots."""

    slot_class = MultipowerSlot

    def __init__(
        self,
        name: str,
        *,
        reserve: int,
        id: str | None = None,
        description: str = "",
        modifiers: Iterable[FrameworkModifier] = (),
        slots: Iterable[MultipowerSlot] = (),
    ):
        self._reserve = whole_points(reserve, "reserve")
        super().__init__(
            name, id=id, description=description, modifiers=modifiers, slots=slots
        )

    @property
    def reserve(self) -> int:
        return self._reserve

    @property
    def allocated_reserve(self) -> float:
        """Active points currently committed across all slots."""
        return sum(slot.allocated_cost for slot in self.slots)

    @property
    def reserve_cost(self) -> int:
        """Real cost of the reserve with the framework's own modifiers."""
        return self.real_cost_of(self._reserve)

    @property
    def total_cost(self) -> int:
        """Reserve cost plus every slot's cost."""
        return self.reserve_cost + sum(slot.cost for slot in self.slots)

    def _validate(self) -> list[AllocationWarning]:
        warnings = []
        if self.allocated_reserve > self._reserve:
            warnings.append(AllocationWarning.too_many_points_allocated())
        for slot in self.slots:
            if slot.allocated_cost > slot.full_cost:
                warnings.append(AllocationWarning.slot_has_too_many_points_allocated(slot))
            if slot.full_cost > self._reserve:
                warnings.append(AllocationWarning.slot_is_too_big_for_reserve(slot))
        return warnings

    @classmethod
    def from_item_data(
        cls,
        item: FrameworkItem | Mapping[str, Any],
        powers: Mapping[str, PowerItem | Mapping[str, Any]],
    ) -> "Multipower":
        """
        Build a Multipower from its stored item.

        Args:
            item: The framework item, with a reserve
            powers: Every power item the slots may refer to, by id

        Returns:
            The Multipower, with slot modifiers applied and warnings computed
        """
        item = coerce_item(FrameworkItem, item)
        if item.framework.reserve is None:
            raise PreconditionError("reserve must be a non-negative integer")

        return cls(
            item.name,
            reserve=item.framework.reserve,
            id=item.id,
            description=item.description,
            modifiers=cls.modifiers_from_item_data(item.framework.modifiers),
            slots=cls._slots_from_item(item, powers, SlotType.FIXED),
        )

    def display(self) -> dict:
        payload = super().display()
        payload.update({
            "reserve": self.reserve,
            "allocated_reserve": self.allocated_reserve,
            "reserve_cost": self.reserve_cost,
            "total_cost": self.total_cost,
        })
        return payload
