"""
Game rules as pure functions and value objects.

Rounding, dice and damage classes, characteristics, to-hit numbers and
point costs. Nothing here knows about stored items.
"""

from .rounding import favouring_higher, favouring_lower
from .formatting import ModifierKind, TaggedNumber, format_tagged, format_number
from .damage import (
    Damage,
    DieAdjustment,
    count_normal_body,
    count_normal_stun,
    count_normal_damage,
    count_killing_body,
    count_killing_stun,
    count_killing_damage,
)
from .characteristics import Characteristic, Weight, by_name, lifting_weight, phases
from .combat import Attack, DamageType, highest_dcv_hit, target_number_to_hit
from .categories import PowerCategory
from .costs import (
    CostInformation,
    CostStructure,
    FixedCost,
    CostPerDie,
    CostPerMeter,
    calculate_base_cost,
    calculate_active_cost,
    calculate_real_cost,
)

__all__ = [
    "favouring_higher",
    "favouring_lower",
    "ModifierKind",
    "TaggedNumber",
    "format_tagged",
    "format_number",
    "Damage",
    "DieAdjustment",
    "count_normal_body",
    "count_normal_stun",
    "count_normal_damage",
    "count_killing_body",
    "count_killing_stun",
    "count_killing_damage",
    "Characteristic",
    "Weight",
    "by_name",
    "lifting_weight",
    "phases",
    "Attack",
    "DamageType",
    "highest_dcv_hit",
    "target_number_to_hit",
    "PowerCategory",
    "CostInformation",
    "CostStructure",
    "FixedCost",
    "CostPerDie",
    "CostPerMeter",
    "calculate_base_cost",
    "calculate_active_cost",
    "calculate_real_cost",
]
