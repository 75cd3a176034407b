"""
Powers.

A power combines a power type, the rules data for each of its categories
(an Attack, a MovementMode) and its modifiers. Its costs are derived on
every access from those parts; nothing is cached.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..errors import NotYetImplementedError, PreconditionError
from ..rules.categories import PowerCategory, get_power_category_by_name
from ..rules.combat import Attack
from ..rules.costs import (
    CostInformation,
    CostStructure,
    calculate_active_cost,
    calculate_base_cost,
    calculate_real_cost,
)
from ..state.schema import PowerItem, coerce_item
from .modifiers import (
    AnyModifier,
    FrameworkModifier,
    FrameworkModifierScope,
    PowerAdder,
    PowerAdvantage,
    PowerLimitation,
    is_modifier,
)
from .movement import ModifiableValue, MovementMode
from .types import PowerType, StandardPowerType, power_type_for

logger = logging.getLogger(__name__)


# Payload type each category carries
CATEGORY_PAYLOADS: dict[PowerCategory, type] = {
    PowerCategory.ATTACK: Attack,
    PowerCategory.MOVEMENT: MovementMode,
}


def _modifier_sort_key(modifier: AnyModifier) -> tuple[bool, str]:
    # Owned modifiers by name, then framework modifiers by name
    return (isinstance(modifier, FrameworkModifier), modifier.name)


def _sorted_modifiers(
    modifiers: Iterable[AnyModifier],
    modifier_type: type,
    label: str,
) -> tuple[AnyModifier, ...]:
    modifiers = tuple(modifiers)
    for modifier in modifiers:
        if not is_modifier(modifier, modifier_type):
            raise PreconditionError(f"{label} for Power must be {modifier_type.__name__}")
    return tuple(sorted(modifiers, key=_modifier_sort_key))


@dataclass(frozen=True)
class Power:
    """
    A power a character has bought.

    `category_data` maps each category to its payload: an Attack for
    ATTACK, a MovementMode for MOVEMENT. A standard power type must be
    given data for every category it declares.
    """
    name: str
    type: PowerType
    id: str | None = None
    summary: str = ""
    description: str = ""
    category_data: Mapping[PowerCategory, Any] = field(default_factory=dict)
    adders: tuple[AnyModifier, ...] = ()
    advantages: tuple[AnyModifier, ...] = ()
    limitations: tuple[AnyModifier, ...] = ()
    cost_override: float | None = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise PreconditionError("name must be a string")
        if not isinstance(self.type, PowerType):
            raise PreconditionError("type must be a PowerType")
        if not isinstance(self.summary, str):
            raise PreconditionError("summary must be a string")
        if not isinstance(self.description, str):
            raise PreconditionError("description must be an HTML string")
        if self.cost_override is not None and (
            not isinstance(self.cost_override, (int, float)) or isinstance(self.cost_override, bool)
        ):
            raise PreconditionError("cost override must be a number if present")

        category_data = {}
        for category, payload in dict(self.category_data).items():
            if not isinstance(category, PowerCategory):
                raise PreconditionError(f"unrecognized category {category}")
            expected = CATEGORY_PAYLOADS[category]
            if not isinstance(payload, expected):
                raise PreconditionError(
                    f"{category.value} category data must be {expected.__name__}"
                )
            category_data[category] = payload
        for category in self.type.categories:
            if category not in category_data:
                raise PreconditionError(f"missing data for {category.value} category")
        object.__setattr__(self, "category_data", MappingProxyType(category_data))

        object.__setattr__(self, "adders", _sorted_modifiers(self.adders, PowerAdder, "adder"))
        object.__setattr__(
            self, "advantages", _sorted_modifiers(self.advantages, PowerAdvantage, "advantage")
        )
        object.__setattr__(
            self, "limitations", _sorted_modifiers(self.limitations, PowerLimitation, "limitation")
        )

    # ─── Categories ──────────────────────────────────────────

    @property
    def categories(self) -> frozenset[PowerCategory]:
        """Categories the power belongs to."""
        if isinstance(self.type, StandardPowerType):
            return self.type.categories
        return frozenset(self.category_data)

    def has_category(self, category: PowerCategory) -> bool:
        return category in self.categories

    @property
    def attack(self) -> Attack:
        """The attack data of an ATTACK power."""
        try:
            return self.category_data[PowerCategory.ATTACK]
        except KeyError:
            raise PreconditionError(f"{self.name} is not an attack power") from None

    @property
    def movement_mode(self) -> MovementMode:
        """The movement mode of a MOVEMENT power."""
        try:
            return self.category_data[PowerCategory.MOVEMENT]
        except KeyError:
            raise PreconditionError(f"{self.name} is not a movement power") from None

    # ─── Costs ───────────────────────────────────────────────

    @property
    def modifiers(self) -> tuple[AnyModifier, ...]:
        return self.adders + self.advantages + self.limitations

    @property
    def cost_structure(self) -> CostStructure | None:
        return self.type.cost_structure

    @property
    def cost(self) -> float:
        """
        Base cost of the power.

        Priced by the power type's cost structure when it accepts the
        power, otherwise the cost override (or nothing).
        """
        structure = self.cost_structure
        if structure is not None:
            if structure.validate(self):
                return structure.cost_of(self)
            logger.warning(
                "Cost structure %r considered power %r invalid", structure, self.name
            )
        return self.cost_override if self.cost_override is not None else 0

    @property
    def cost_information(self) -> CostInformation:
        return CostInformation(
            base=self.cost,
            adders=sum(adder.value for adder in self.adders),
            advantages=sum(advantage.value for advantage in self.advantages),
            limitations=sum(abs(limitation.value) for limitation in self.limitations),
        )

    @property
    def base_cost(self) -> float:
        return calculate_base_cost(self.cost_information)

    @property
    def active_cost(self) -> int:
        return calculate_active_cost(self.cost_information)

    @property
    def real_cost(self) -> int:
        return calculate_real_cost(self.cost_information)

    # ─── Composition ─────────────────────────────────────────

    def with_framework_modifiers(self, modifiers: Iterable[FrameworkModifier]) -> "Power":
        """This power with its framework's slot modifiers appended."""
        return apply_framework_modifiers(self, modifiers)

    # ─── Item data ───────────────────────────────────────────

    @classmethod
    def from_item_data(cls, item: PowerItem | Mapping[str, Any]) -> "Power":
        """Build a power from a stored power item."""
        item = coerce_item(PowerItem, item)
        power_type = power_type_for(item.type.name, item.type.is_standard)

        wanted = set(power_type.categories)
        for name, present in item.categories.items():
            category = get_power_category_by_name(name)
            if category is None:
                raise PreconditionError(f"no such category {name}")
            if present:
                wanted.add(category)

        category_data = {
            category: _category_data_from_item(category, item, power_type)
            for category in sorted(wanted, key=lambda category: category.value)
        }

        return cls(
            name=item.name,
            type=power_type,
            id=item.id,
            summary=item.summary,
            description=item.description,
            category_data=category_data,
            adders=[
                PowerAdder.from_item_data(data, id=modifier_id)
                for modifier_id, data in item.adders.items()
            ],
            advantages=[
                PowerAdvantage.from_item_data(data, id=modifier_id)
                for modifier_id, data in item.advantages.items()
            ],
            limitations=[
                PowerLimitation.from_item_data(data, id=modifier_id)
                for modifier_id, data in item.limitations.items()
            ],
            cost_override=item.cost_override,
        )

    def display(self) -> dict:
        """Presentation payload."""
        structure = self.cost_structure
        categories = {}
        if self.has_category(PowerCategory.ATTACK):
            damage = self.attack.damage
            categories["attack"] = {
                "dice": damage.dice,
                "dice_string": damage.dice_string,
            }
        if self.has_category(PowerCategory.MOVEMENT):
            categories["movement"] = {
                "distance": self.movement_mode.distance.total,
            }

        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.name,
            "summary": self.summary,
            "cost": self.cost,
            "active_cost": self.active_cost,
            "real_cost": self.real_cost,
            "cost_structure": structure.summary if structure is not None else None,
            "modifiers": [modifier.display() for modifier in self.modifiers],
            "categories": categories,
        }


def _category_data_from_item(
    category: PowerCategory,
    item: PowerItem,
    power_type: PowerType,
) -> Any:
    if category == PowerCategory.ATTACK:
        if item.attack is None:
            raise PreconditionError(f"missing data for {category.value} category")
        return Attack.from_item_data(item.name, item.attack, id=item.id)
    if category == PowerCategory.MOVEMENT:
        if item.movement is None:
            raise PreconditionError(f"missing data for {category.value} category")
        distance = item.movement.distance
        return MovementMode(
            name=item.name,
            type=power_type,
            distance=ModifiableValue(distance.value, distance.modifier),
            id=item.id,
        )
    raise PreconditionError(f"unrecognized category {category}")


def apply_framework_modifiers(power: Power, modifiers: Iterable[FrameworkModifier]) -> Power:
    """
    A new power carrying a framework's modifiers.

    FrameworkOnly modifiers never reach slots and are skipped. The rest
    are appended to the matching list after the power's own modifiers.
    """
    adders = list(power.adders)
    advantages = list(power.advantages)
    limitations = list(power.limitations)

    for modifier in modifiers:
        if not isinstance(modifier, FrameworkModifier):
            raise PreconditionError("framework modifiers must be FrameworkModifiers")
        if modifier.scope == FrameworkModifierScope.FRAMEWORK_ONLY:
            continue
        if modifier.is_a(PowerAdder):
            adders.append(modifier)
        elif modifier.is_a(PowerAdvantage):
            advantages.append(modifier)
        elif modifier.is_a(PowerLimitation):
            limitations.append(modifier)
        else:
            raise NotYetImplementedError(f"unrecognized modifier type for {modifier.name}")

    return replace(power, adders=adders, advantages=advantages, limitations=limitations)
