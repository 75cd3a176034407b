"""
Inbound item data for the rules engine.

These models describe the plain data a host application stores for
powers and frameworks. Field names are snake_case; the camelCase names
used by the stored documents are accepted as aliases. The models only
check shapes and types; rules-level checks happen when the domain
objects are built from them.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator


Number = Union[StrictInt, StrictFloat]


class ItemModel(BaseModel):
    """Base for item data: accepts aliases and field names, ignores extras."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


ModelT = TypeVar("ModelT", bound=ItemModel)


def coerce_item(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """Validate raw mapping data into `model`, passing instances through."""
    if isinstance(data, model):
        return data
    return model.model_validate(data)


# ─── Powers ──────────────────────────────────────────────────


class PowerTypeData(ItemModel):
    """Which power type a power uses."""
    is_standard: bool = Field(default=True, alias="isStandard")
    name: str


class CombatValueData(ItemModel):
    """Which combat values an attack rolls against."""
    offensive: str = "ocv"
    defensive: str = "dcv"


class DamageData(ItemModel):
    """Dice of an attack."""
    dice: Number = 0
    ap_per_die: Number = Field(default=5, alias="apPerDie")
    type: str = "normal"


class AttackData(ItemModel):
    """Attack category payload."""
    cv: CombatValueData = Field(default_factory=CombatValueData)
    damage: DamageData = Field(default_factory=DamageData)
    defense: str = ""
    description: str = ""

    @field_validator("defense", mode="before")
    @classmethod
    def unwrap_defense(cls, value: Any) -> Any:
        """Stored documents keep the defense as {"value": ...}."""
        if isinstance(value, Mapping):
            return value.get("value", "")
        return value


class DistanceData(ItemModel):
    """A distance in meters with its modifier."""
    value: Number = 0
    modifier: Number = 0


class MovementData(ItemModel):
    """Movement category payload."""
    distance: DistanceData = Field(default_factory=DistanceData)


class ModifierData(ItemModel):
    """An adder, advantage or limitation."""
    name: str
    value: Number = 0
    summary: str = ""
    description: str = ""
    increases_damage: bool | None = Field(default=None, alias="increasesDamage")


class PowerItem(ItemModel):
    """A stored power."""
    id: str | None = None
    name: str
    type: PowerTypeData
    summary: str = ""
    description: str = ""
    categories: dict[str, bool] = Field(default_factory=dict)
    attack: AttackData | None = None
    movement: MovementData | None = None
    adders: dict[str, ModifierData] = Field(default_factory=dict)
    advantages: dict[str, ModifierData] = Field(default_factory=dict)
    limitations: dict[str, ModifierData] = Field(default_factory=dict)
    framework: str | None = None
    cost_override: Number | None = Field(default=None, alias="costOverride")


# ─── Frameworks ──────────────────────────────────────────────


class FrameworkModifierData(ItemModel):
    """A modifier declared on a framework."""
    scope: str
    type: str
    modifier: ModifierData


class SlotData(ItemModel):
    """A framework slot."""
    powers: list[str] = Field(default_factory=list)
    active: bool | None = None
    fixed: bool | None = None
    allocated_cost: Number = Field(default=0, alias="allocatedCost")
    full_cost: Number | None = Field(default=None, alias="fullCost")


class FrameworkData(ItemModel):
    """Framework-specific fields: a reserve, or a control and pool."""
    reserve: Number | None = None
    control: Number | None = None
    pool: Number | None = None
    modifiers: dict[str, FrameworkModifierData] = Field(default_factory=dict)
    slots: dict[str, SlotData] = Field(default_factory=dict)

    @field_validator("reserve", "control", "pool")
    @classmethod
    def whole_points(cls, value: int | float | None) -> int | None:
        """Stored budgets may be written as 60.0; they are still whole points."""
        if value is None:
            return None
        if not float(value).is_integer():
            raise ValueError("must be a whole number of points")
        return int(value)


class FrameworkItem(ItemModel):
    """A stored Multipower or VPP."""
    id: str
    name: str
    description: str = ""
    framework: FrameworkData = Field(default_factory=FrameworkData)
