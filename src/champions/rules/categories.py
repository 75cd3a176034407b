"""Power categories: kinds of power whose effect needs extra rules data."""

from enum import Enum


class PowerCategory(str, Enum):
    """
    Categories of powers with special handling.

    ATTACK powers roll damage or effect dice and carry an Attack.
    MOVEMENT powers give a mode of movement and carry a MovementMode.
    """
    ATTACK = "attack"
    MOVEMENT = "movement"


def is_power_category_name(name: str) -> bool:
    """Whether a stored category key names a known category."""
    return name.lower() in {category.value for category in PowerCategory}


def get_power_category_by_name(name: str) -> PowerCategory | None:
    """Look up a category by its stored key ("attack", "MOVEMENT", ...)."""
    if not is_power_category_name(name):
        return None
    return PowerCategory(name.lower())
