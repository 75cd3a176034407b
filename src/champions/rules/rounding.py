"""
Rounding policies for point costs.

HERO costs round to the nearest whole point, but which way an exact half
goes depends on who benefits. Costs the character pays favour the lower
number; values the character gains favour the higher one.
"""

import math

# Anything this far above an exact half still rounds down when favouring lower
EPSILON = 0.0000001


def favouring_higher(value: float) -> int:
    """Round to the nearest integer, halves going up (6.5 -> 7)."""
    return math.floor(value + 0.5)


def favouring_lower(value: float) -> int:
    """Round to the nearest integer, exact halves going down (6.5 -> 6)."""
    return math.floor(value - EPSILON + 0.5)
