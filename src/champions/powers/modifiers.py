"""
Power modifiers: adders, advantages and limitations.

Values are sign-normalized on construction. Adders and advantages are
never negative; limitations are never positive. Adders are whole points,
advantages and limitations may be fractions (quarters).

Frameworks declare modifiers with a scope saying whether they apply to
the framework's own cost, to its slots, or to both.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Mapping

from ..errors import NotYetImplementedError, PreconditionError
from ..rules.formatting import ModifierKind, TaggedNumber
from ..state.schema import FrameworkModifierData, ModifierData, coerce_item


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class PowerModifier:
    """Base for anything that changes a power's cost."""
    name: str
    value: float
    summary: str = ""
    description: str = ""
    id: str | None = None

    kind: ClassVar[ModifierKind] = ModifierKind.PLAIN

    def __post_init__(self):
        if self.id is not None and not isinstance(self.id, str):
            raise PreconditionError("id must be a string if present")
        if not isinstance(self.name, str):
            raise PreconditionError("name must be a string")
        if not _is_number(self.value):
            raise PreconditionError("value must be a number")
        if not isinstance(self.summary, str):
            raise PreconditionError("summary must be a string")
        if not isinstance(self.description, str):
            raise PreconditionError("description must be an HTML string")
        object.__setattr__(self, "value", self._normalize(self.value))

    def _normalize(self, value: float) -> float:
        return value

    @property
    def tagged_value(self) -> TaggedNumber:
        """The value paired with the rule that renders it."""
        return TaggedNumber(self.kind, self.value)

    @property
    def value_string(self) -> str:
        """The value as shown on a character sheet ("+5 CP", "-¼")."""
        return str(self.tagged_value)

    @classmethod
    def _from_data(cls, data: ModifierData, id: str | None) -> "PowerModifier":
        return cls(
            name=data.name,
            value=data.value,
            summary=data.summary,
            description=data.description,
            id=id,
        )

    @classmethod
    def from_item_data(
        cls,
        data: ModifierData | Mapping[str, Any],
        id: str | None = None,
    ) -> "PowerModifier":
        """Build a modifier from stored modifier data."""
        return cls._from_data(coerce_item(ModifierData, data), id)

    def to_item_data(self) -> dict:
        """Stored form of the modifier."""
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "summary": self.summary,
            "description": self.description,
        }

    def display(self) -> dict:
        """Presentation payload."""
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "value_string": self.value_string,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class PowerAdder(PowerModifier):
    """A flat number of points added to the base cost."""

    kind: ClassVar[ModifierKind] = ModifierKind.ADDER

    def _normalize(self, value: float) -> int:
        if not float(value).is_integer():
            raise PreconditionError("Adders cannot have fractional values")
        return abs(int(value))


@dataclass(frozen=True)
class PowerAdvantage(PowerModifier):
    """A multiplier on active cost (+¼, +½, ...)."""
    increases_damage: bool = False

    kind: ClassVar[ModifierKind] = ModifierKind.ADVANTAGE

    def __post_init__(self):
        if not isinstance(self.increases_damage, bool):
            raise PreconditionError("increases_damage must be a boolean")
        super().__post_init__()

    def _normalize(self, value: float) -> float:
        return abs(value)

    @classmethod
    def _from_data(cls, data: ModifierData, id: str | None) -> "PowerAdvantage":
        return cls(
            name=data.name,
            value=data.value,
            summary=data.summary,
            description=data.description,
            id=id,
            increases_damage=bool(data.increases_damage),
        )

    def to_item_data(self) -> dict:
        data = super().to_item_data()
        data["increasesDamage"] = self.increases_damage
        return data


@dataclass(frozen=True)
class PowerLimitation(PowerModifier):
    """A divisor on real cost (-¼, -½, ...)."""

    kind: ClassVar[ModifierKind] = ModifierKind.LIMITATION

    def _normalize(self, value: float) -> float:
        return -abs(value)


# ─── Framework modifiers ─────────────────────────────────────


class FrameworkModifierScope(str, Enum):
    """Which costs a framework modifier applies to."""
    FRAMEWORK_ONLY = "FrameworkOnly"
    FRAMEWORK_AND_SLOTS = "FrameworkAndSlots"
    SLOTS_ONLY = "SlotsOnly"

    @property
    def applies_to_framework(self) -> bool:
        return self != FrameworkModifierScope.SLOTS_ONLY

    @property
    def applies_to_slots(self) -> bool:
        return self != FrameworkModifierScope.FRAMEWORK_ONLY

    @property
    def display_name(self) -> str:
        """Kebab-case label ("framework-and-slots")."""
        return {
            FrameworkModifierScope.FRAMEWORK_ONLY: "framework-only",
            FrameworkModifierScope.FRAMEWORK_AND_SLOTS: "framework-and-slots",
            FrameworkModifierScope.SLOTS_ONLY: "slots-only",
        }[self]


FRAMEWORK_MODIFIER_TYPES: dict[str, type[PowerModifier]] = {
    "advantage": PowerAdvantage,
    "limitation": PowerLimitation,
}


@dataclass(frozen=True)
class FrameworkModifier:
    """A modifier declared on a framework, with its scope."""
    modifier: PowerModifier
    scope: FrameworkModifierScope = field(default=FrameworkModifierScope.FRAMEWORK_AND_SLOTS)

    def __post_init__(self):
        if not isinstance(self.modifier, PowerModifier):
            raise PreconditionError("modifier must be a PowerModifier")
        try:
            object.__setattr__(self, "scope", FrameworkModifierScope(self.scope))
        except ValueError:
            raise PreconditionError(f"unrecognized scope {self.scope}") from None

    @property
    def id(self) -> str | None:
        return self.modifier.id

    @property
    def name(self) -> str:
        return self.modifier.name

    @property
    def value(self) -> float:
        return self.modifier.value

    @property
    def summary(self) -> str:
        return self.modifier.summary

    @property
    def description(self) -> str:
        return self.modifier.description

    @property
    def kind(self) -> ModifierKind:
        return self.modifier.kind

    @property
    def value_string(self) -> str:
        return self.modifier.value_string

    def is_a(self, modifier_type: type[PowerModifier]) -> bool:
        """Whether the wrapped modifier is of the given type."""
        return isinstance(self.modifier, modifier_type)

    @classmethod
    def from_item_data(
        cls,
        data: FrameworkModifierData | Mapping[str, Any],
        id: str | None = None,
    ) -> "FrameworkModifier":
        """Build a framework modifier from stored data."""
        data = coerce_item(FrameworkModifierData, data)
        try:
            scope = FrameworkModifierScope(data.scope)
        except ValueError:
            raise PreconditionError(f"unrecognized scope {data.scope}") from None

        if data.type == "adder":
            raise PreconditionError("Frameworks cannot have adders")
        modifier_class = FRAMEWORK_MODIFIER_TYPES.get(data.type)
        if modifier_class is None:
            raise NotYetImplementedError(f"unrecognized framework modifier type {data.type}")

        return cls(modifier_class.from_item_data(data.modifier, id=id), scope)

    def display(self) -> dict:
        """Presentation payload, noting where the modifier came from."""
        payload = self.modifier.display()
        payload["note"] = f"{self.scope.display_name} modifier from framework"
        return payload


AnyModifier = PowerModifier | FrameworkModifier


def is_modifier(modifier: Any, modifier_type: type[PowerModifier]) -> bool:
    """Whether something is, or wraps, a modifier of the given type."""
    if isinstance(modifier, FrameworkModifier):
        return modifier.is_a(modifier_type)
    return isinstance(modifier, modifier_type)
