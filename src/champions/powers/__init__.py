"""
Powers and power frameworks.

Everything here is built from plain item data and never mutated; costs
and warnings are derived from the parts on access or at construction.
"""

from .types import (
    PowerType,
    StandardPowerType,
    CustomPowerType,
    POWER_DATA,
    POWER_NAMES,
    power_type_for,
)
from .movement import ModifiableValue, MovementMode
from .modifiers import (
    PowerModifier,
    PowerAdder,
    PowerAdvantage,
    PowerLimitation,
    FrameworkModifier,
    FrameworkModifierScope,
    is_modifier,
)
from .power import Power, apply_framework_modifiers
from .frameworks import AllocationWarning, WarningScope, SlotType, Slot, Framework
from .multipowers import Multipower, MultipowerSlot
from .vpps import VPP, VPPSlot

__all__ = [
    "PowerType",
    "StandardPowerType",
    "CustomPowerType",
    "POWER_DATA",
    "POWER_NAMES",
    "power_type_for",
    "ModifiableValue",
    "MovementMode",
    "PowerModifier",
    "PowerAdder",
    "PowerAdvantage",
    "PowerLimitation",
    "FrameworkModifier",
    "FrameworkModifierScope",
    "is_modifier",
    "Power",
    "apply_framework_modifiers",
    # Frameworks
    "AllocationWarning",
    "WarningScope",
    "SlotType",
    "Slot",
    "Framework",
    "Multipower",
    "MultipowerSlot",
    "VPP",
    "VPPSlot",
]
