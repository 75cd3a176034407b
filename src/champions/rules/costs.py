"""
Character point costs.

Costs are computed in three stages, always in this order:
    base   -> what the effect itself costs
    active -> base plus adders, multiplied up by advantages
    real   -> active divided down by limitations (what is paid)

Each rounding step favours the lower number.

Cost structures turn a power into its base cost. Standard powers pay a
flat amount, an amount per d6 of effect, or an amount per meter of
movement.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import PreconditionError
from .categories import PowerCategory
from .damage import Damage
from .formatting import format_number
from .rounding import favouring_lower

if TYPE_CHECKING:
    from ..powers.power import Power


@dataclass(frozen=True)
class CostInformation:
    """
    Inputs to the cost stages.

    `advantages` is the sum of advantage values; `limitations` is the sum
    of the absolute values of limitation values.
    """
    base: float
    adders: float = 0
    advantages: float = 0
    limitations: float = 0


def calculate_base_cost(info: CostInformation) -> float:
    """Base cost: the effect alone."""
    return info.base


def calculate_active_cost(info: CostInformation) -> int:
    """Active cost: (base + adders) * (1 + advantages), favouring lower."""
    return favouring_lower((info.base + info.adders) * (1 + info.advantages))


def calculate_real_cost(info: CostInformation) -> int:
    """Real cost: active / (1 + limitations), favouring lower."""
    return favouring_lower(calculate_active_cost(info) / (1 + info.limitations))


# ─── Cost structures ─────────────────────────────────────────


class CostStructure(ABC):
    """How a power's base cost is derived from its rules data."""

    expected_category: PowerCategory | None = None

    def validate(self, power: Power) -> bool:
        """Whether this structure can price the power."""
        return self.expected_category is None or power.has_category(self.expected_category)

    def cost_of(self, power: Power) -> float:
        """Base cost of the power. Raises if the power fails validation."""
        if not self.validate(power):
            raise PreconditionError(
                f"{self.summary} needs a {self.expected_category.value} power, "
                f"got {power.name!r}"
            )
        return self._cost_of(power)

    @abstractmethod
    def _cost_of(self, power: Power) -> float:
        ...

    @property
    @abstractmethod
    def summary(self) -> str:
        """Short description for display ("5 CP per d6")."""
        ...


class FixedCost(CostStructure):
    """A flat cost regardless of the power's data."""

    def __init__(self, cost: float):
        if not isinstance(cost, (int, float)) or isinstance(cost, bool):
            raise PreconditionError("cost must be a number")
        self.cost = cost

    def _cost_of(self, power: Power) -> float:
        return self.cost

    @property
    def summary(self) -> str:
        return ""

    def __repr__(self) -> str:
        return f"FixedCost({format_number(self.cost)})"


class CostPerDie(CostStructure):
    """
    Cost paid per d6 of effect.

    When the damage table knows this cost per die, the power's dice are
    re-read at that rate and priced at 5 CP per DC, so half dice and pips
    cost their DC share. Other rates pay for every started die.
    """

    expected_category = PowerCategory.ATTACK

    def __init__(self, cost_per_die: float):
        self.cost_per_die = cost_per_die

    def _cost_of(self, power: Power) -> float:
        dice = power.attack.damage.dice
        if Damage.supports_ap_per_die(self.cost_per_die):
            return Damage.from_dice(dice, self.cost_per_die).dc * 5
        return self.cost_per_die * math.ceil(dice)

    @property
    def summary(self) -> str:
        return f"{format_number(self.cost_per_die)} CP per d6"

    def __repr__(self) -> str:
        return f"CostPerDie({format_number(self.cost_per_die)})"


class CostPerMeter(CostStructure):
    """Cost paid per meter of movement, rounded up."""

    expected_category = PowerCategory.MOVEMENT

    def __init__(self, cost_per_meter: float):
        self.cost_per_meter = cost_per_meter

    def _cost_of(self, power: Power) -> float:
        return math.ceil(power.movement_mode.distance.base * self.cost_per_meter)

    @property
    def summary(self) -> str:
        return f"{format_number(self.cost_per_meter)} CP per m"

    def __repr__(self) -> str:
        return f"CostPerMeter({format_number(self.cost_per_meter)})"
