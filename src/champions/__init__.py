"""
HERO System 6th edition rules engine.

Turns stored character data into point costs, damage classes, to-hit
numbers and framework allocation warnings.
"""

__version__ = "0.1.0"
