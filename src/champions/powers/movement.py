"""Movement modes: how far a character moves in one way of moving."""

from dataclasses import dataclass

from ..errors import PreconditionError
from .types import PowerType


@dataclass(frozen=True)
class ModifiableValue:
    """A base value plus a situational modifier."""
    base: float
    modifier: float = 0

    @property
    def total(self) -> float:
        return self.base + self.modifier


@dataclass(frozen=True)
class MovementMode:
    """A named way of moving and its distance in meters."""
    name: str
    type: PowerType
    distance: ModifiableValue
    id: str | None = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise PreconditionError("name must be a string")
        if not isinstance(self.type, PowerType):
            raise PreconditionError("type must be a PowerType")
        if not isinstance(self.distance, ModifiableValue):
            raise PreconditionError("distance must be a ModifiableValue")

    def display(self) -> dict:
        """Presentation payload."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.name,
            "distance": self.distance.total,
        }
