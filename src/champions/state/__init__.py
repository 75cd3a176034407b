"""Inbound item data models."""

from .schema import (
    ItemModel,
    coerce_item,
    PowerTypeData,
    CombatValueData,
    DamageData,
    AttackData,
    DistanceData,
    MovementData,
    ModifierData,
    PowerItem,
    FrameworkModifierData,
    SlotData,
    FrameworkData,
    FrameworkItem,
)

__all__ = [
    "ItemModel",
    "coerce_item",
    "PowerTypeData",
    "CombatValueData",
    "DamageData",
    "AttackData",
    "DistanceData",
    "MovementData",
    "ModifierData",
    "PowerItem",
    "FrameworkModifierData",
    "SlotData",
    "FrameworkData",
    "FrameworkItem",
]
