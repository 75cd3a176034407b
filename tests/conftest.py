"""
Pytest fixtures for the rules engine tests.

Provides stored item data and prebuilt powers for isolated testing.
"""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from champions.powers import (
    CustomPowerType,
    Power,
    PowerAdvantage,
    PowerLimitation,
)


@pytest.fixture
def blink_item():
    """Stored Teleportation power with attack and movement data."""
    return {
        "id": "1234",
        "name": "Blink",
        "type": {"isStandard": True, "name": "Teleportation"},
        "summary": "Teleport 40m",
        "description": "<p></p>",
        "categories": {"attack": True, "movement": True},
        "attack": {
            "cv": {"offensive": "ocv", "defensive": "dcv"},
            "damage": {"apPerDie": 5, "dice": 2, "type": "normal"},
            "defense": {"value": "Energy"},
        },
        "movement": {"distance": {"value": 40, "modifier": 0}},
        "adders": {
            "1": {
                "name": "Safe Aquatic Teleport",
                "value": 5,
                "summary": "Treat liquids as if they were air instead of solids",
                "description": "<p>You can safely teleport into water.</p>",
            },
        },
        "advantages": {
            "a": {
                "name": "Reduced Endurance Cost",
                "value": 0.5,
                "summary": "0 END cost",
                "description": "<p></p>",
            },
            "b": {
                "name": "Combat Acceleration/Deceleration",
                "value": 0.25,
                "summary": "Accelerate/decelerate by full combat movement per meter",
                "description": "<p></p>",
            },
        },
        "limitations": {
            "a": {
                "name": "Must Pass Through Intervening Space",
                "value": -0.25,
                "summary": "Can't use it to escape entangles.",
                "description": "<p></p>",
            },
        },
    }


def blast_item(id, dice, framework=None, name=None):
    """Stored Blast power, optionally inside a framework."""
    return {
        "id": id,
        "name": name or f"Blast {id}",
        "type": {"isStandard": True, "name": "Blast"},
        "categories": {"attack": True},
        "attack": {
            "cv": {"offensive": "ocv", "defensive": "dcv"},
            "damage": {"dice": dice, "apPerDie": 5},
            "defense": {"value": "ED"},
        },
        "framework": framework,
    }


@pytest.fixture
def make_blast_item():
    """Factory for stored Blast powers."""
    return blast_item


@pytest.fixture
def telekinesis():
    """Custom Telekinesis power priced by override."""
    return Power(
        "Geokinesis",
        CustomPowerType("Telekinesis"),
        cost_override=45,
        advantages=[PowerAdvantage("Area of Effect", 0.5)],
        limitations=[PowerLimitation("Only Earth", -0.5)],
    )
