"""
Exceptions raised by the rules engine.

Structural problems with caller data are preconditions and fail fast.
Legal-but-unmodelled rules combinations get their own error so callers
can tell "invalid" apart from "not built yet". Budget problems are
never raised; frameworks report them as warnings.
"""


class RulesError(Exception):
    """Base error for the rules engine."""
    pass


class PreconditionError(RulesError, ValueError):
    """Caller supplied structurally invalid data."""
    pass


class DamageError(PreconditionError):
    """Dice, adjustment and DC combination the damage table cannot express."""
    def __init__(self, message: str, ap_per_die: float | None = None):
        self.ap_per_die = ap_per_die
        super().__init__(message)


class NotYetImplementedError(RulesError, NotImplementedError):
    """Valid per the rules, but not modelled by the engine yet."""
    pass
