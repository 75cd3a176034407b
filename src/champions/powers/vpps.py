"""
Variable Power Pools.

A VPP has a control cost, capping the active points of any one slot, and
a pool of real points shared by whatever slots are currently allocated.
Every VPP slot is variable; it draws on the pool in proportion to how
much of its full cost is allocated.
"""

from typing import Any, Iterable, Mapping

from ..errors import PreconditionError
from ..rules.rounding import favouring_lower
from ..state.schema import FrameworkItem, PowerItem, coerce_item
from .frameworks import AllocationWarning, Framework, Slot, SlotType, whole_points
from .modifiers import FrameworkModifier

# Control costs half a point per active point it allows
CONTROL_COST_MULTIPLIER = 2


class VPPSlot(Slot):
    """A VPP slot. Always variable."""

    def __init__(self, power, **kwargs):
        kwargs["slot_type"] = SlotType.VARIABLE
        super().__init__(power, **kwargs)

    @property
    def real_cost(self) -> int:
        """Real cost of the slot's power at its full cost."""
        return self.power.real_cost

    @property
    def allocated_real_cost(self) -> int:
        """Pool points used: real cost scaled by the allocated share."""
        if self.full_cost == 0:
            return 0
        return favouring_lower(self.real_cost * self.allocated_cost / self.full_cost)

    def display(self, warnings=()) -> dict:
        payload = super().display(warnings)
        payload["real_cost"] = self.real_cost
        payload["allocated_real_cost"] = self.allocated_real_cost
        return payload


class VPP(Framework):
    """A framework with a control cap and a shared pool of real points."""

    slot_class = VPPSlot

    def __init__(
        self,
        name: str,
        *,
        control: int,
        pool: int,
        id: str | None = None,
        description: str = "",
        modifiers: Iterable[FrameworkModifier] = (),
        slots: Iterable[VPPSlot] = (),
    ):
        self._control = whole_points(control, "control")
        self._pool = whole_points(pool, "pool")
        super().__init__(
            name, id=id, description=description, modifiers=modifiers, slots=slots
        )

    @property
    def control(self) -> int:
        return self._control

    @property
    def pool(self) -> int:
        return self._pool

    @property
    def allocated_pool(self) -> int:
        """Real points currently drawn from the pool."""
        return sum(slot.allocated_real_cost for slot in self.slots)

    @property
    def control_cost(self) -> int:
        """Real cost of the control with the framework's own modifiers."""
        return self.real_cost_of(self._control * CONTROL_COST_MULTIPLIER)

    @property
    def total_cost(self) -> int:
        """Control cost plus the pool; modifiers never touch the pool."""
        return self.control_cost + self._pool

    def _validate(self) -> list[AllocationWarning]:
        warnings = []
        if self.allocated_pool > self._pool:
            warnings.append(AllocationWarning.too_many_real_points_allocated())
        for slot in self.slots:
            if slot.full_cost > self._control:
                warnings.append(AllocationWarning.slot_is_too_big_for_control(slot))
            if slot.allocated_cost > slot.full_cost:
                warnings.append(AllocationWarning.slot_has_too_many_points_allocated(slot))
        return warnings

    @classmethod
    def from_item_data(
        cls,
        item: FrameworkItem | Mapping[str, Any],
        powers: Mapping[str, PowerItem | Mapping[str, Any]],
    ) -> "VPP":
        """Build a VPP from its stored item and the power items it refers to."""
        item = coerce_item(FrameworkItem, item)
        if item.framework.control is None:
            raise PreconditionError("control must be a non-negative integer")
        if item.framework.pool is None:
            raise PreconditionError("pool must be a non-negative integer")

        return cls(
            item.name,
            control=item.framework.control,
            pool=item.framework.pool,
            id=item.id,
            description=item.description,
            modifiers=cls.modifiers_from_item_data(item.framework.modifiers),
            slots=cls._slots_from_item(item, powers, SlotType.VARIABLE),
        )

    def display(self) -> dict:
        payload = super().display()
        payload.update({
            "control": self.control,
            "pool": self.pool,
            "allocated_pool": self.allocated_pool,
            "control_cost": self.control_cost,
            "total_cost": self.total_cost,
        })
        return payload
