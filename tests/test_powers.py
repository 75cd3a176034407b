"""
Tests for Power construction, item data and framework modifiers.
"""

import pytest
from champions.errors import NotYetImplementedError, PreconditionError
from champions.powers import (
    CustomPowerType,
    FrameworkModifier,
    FrameworkModifierScope,
    ModifiableValue,
    MovementMode,
    Power,
    PowerAdder,
    PowerAdvantage,
    PowerLimitation,
    PowerModifier,
    StandardPowerType,
    apply_framework_modifiers,
)
from champions.rules.categories import PowerCategory
from champions.rules.damage import Damage


class TestPowerValidation:
    """Test Power preconditions."""

    def test_requires_power_type(self):
        with pytest.raises(PreconditionError, match="type must be a PowerType"):
            Power("Lightbolt", "Blast")

    def test_accepts_any_power_type(self):
        Power("Lightbolt", StandardPowerType.get("Transform"))
        Power("Lightbolt", CustomPowerType("Blast"))

    def test_standard_type_needs_its_category_data(self):
        with pytest.raises(PreconditionError, match="missing data for attack category"):
            Power("Lightbolt", StandardPowerType.get("Blast"))

    def test_category_data_must_match_category(self):
        with pytest.raises(PreconditionError, match="attack category data must be Attack"):
            Power(
                "Lightbolt",
                CustomPowerType("Bolt"),
                category_data={PowerCategory.ATTACK: Damage(3)},
            )

    def test_modifier_lists_are_typed(self):
        with pytest.raises(PreconditionError, match="adder for Power must be PowerAdder"):
            Power(
                "Lightbolt",
                CustomPowerType("Bolt"),
                adders=[PowerAdvantage("Armor Piercing", 0.5)],
            )

    def test_rejects_non_numeric_override(self):
        with pytest.raises(PreconditionError, match="cost override"):
            Power("Lightbolt", CustomPowerType("Bolt"), cost_override="45")

    def test_non_attack_has_no_attack(self):
        power = Power("Knack", CustomPowerType("Knack"))

        with pytest.raises(PreconditionError, match="Knack is not an attack power"):
            power.attack


class TestFromItemData:
    """Test Power.from_item_data."""

    def test_exposes_name_id_summary_description(self, blink_item):
        power = Power.from_item_data(blink_item)

        assert power.id == "1234"
        assert power.name == "Blink"
        assert power.summary == "Teleport 40m"
        assert power.description == "<p></p>"

    def test_standard_type(self, blink_item):
        power = Power.from_item_data(blink_item)

        assert power.type is StandardPowerType.get("Teleportation")

    def test_custom_type(self, blink_item):
        blink_item["type"] = {"isStandard": False, "name": "Blink"}
        power = Power.from_item_data(blink_item)

        assert isinstance(power.type, CustomPowerType)
        assert power.type.name == "Blink"

    def test_custom_categories_come_from_item(self, blink_item):
        blink_item["type"] = {"isStandard": False, "name": "Teleportation"}
        power = Power.from_item_data(blink_item)

        assert power.has_category(PowerCategory.MOVEMENT)
        assert power.movement_mode == MovementMode(
            "Blink",
            CustomPowerType("Teleportation"),
            ModifiableValue(40, 0),
            id="1234",
        )
        assert power.has_category(PowerCategory.ATTACK)
        assert power.attack.damage == Damage(2, 5)

    def test_standard_categories_come_from_type(self, blink_item):
        blink_item["categories"] = {"movement": False, "attack": True}
        power = Power.from_item_data(blink_item)

        assert power.has_category(PowerCategory.MOVEMENT)
        assert power.movement_mode.distance == ModifiableValue(40, 0)
        assert not power.has_category(PowerCategory.ATTACK)

    def test_unknown_category(self, blink_item):
        blink_item["categories"] = {"flying": True}

        with pytest.raises(PreconditionError, match="no such category flying"):
            Power.from_item_data(blink_item)

    def test_category_without_data(self, blink_item):
        blink_item["type"] = {"isStandard": False, "name": "Teleportation"}
        del blink_item["attack"]

        with pytest.raises(PreconditionError, match="missing data for attack category"):
            Power.from_item_data(blink_item)

    def test_adders(self, blink_item):
        power = Power.from_item_data(blink_item)

        assert len(power.adders) == 1
        assert isinstance(power.adders[0], PowerAdder)
        assert power.adders[0].name == "Safe Aquatic Teleport"
        assert power.adders[0].id == "1"

    def test_advantages_sorted_by_name(self, blink_item):
        power = Power.from_item_data(blink_item)

        assert all(isinstance(a, PowerAdvantage) for a in power.advantages)
        assert [a.name for a in power.advantages] == [
            "Combat Acceleration/Deceleration",
            "Reduced Endurance Cost",
        ]

    def test_limitations(self, blink_item):
        power = Power.from_item_data(blink_item)

        assert len(power.limitations) == 1
        assert isinstance(power.limitations[0], PowerLimitation)
        assert power.limitations[0].value == -0.25

    def test_costs(self, blink_item):
        """40m of Teleportation, +5 CP, +¾, -¼."""
        power = Power.from_item_data(blink_item)

        assert power.cost == 40
        assert power.base_cost == 40
        assert power.active_cost == 79
        assert power.real_cost == 63

    def test_attack_dice_between_table_steps(self, make_blast_item):
        item = make_blast_item("b1", 1)
        item["attack"]["damage"]["apPerDie"] = 6.25
        power = Power.from_item_data(item)

        assert power.attack.damage.dc == 1.25
        assert power.cost == 5

    def test_cost_override_read_from_item(self):
        power = Power.from_item_data({
            "name": "Geokinesis",
            "type": {"isStandard": False, "name": "Telekinesis"},
            "costOverride": 45,
        })
        assert power.cost == 45


class TestDisplay:
    """Test Power.display."""

    def test_movement_power(self, blink_item):
        payload = Power.from_item_data(blink_item).display()

        assert payload["id"] == "1234"
        assert payload["type"] == "Teleportation"
        assert payload["cost"] == 40
        assert payload["active_cost"] == 79
        assert payload["real_cost"] == 63
        assert payload["cost_structure"] == "1 CP per m"
        assert payload["categories"] == {"movement": {"distance": 40}}
        assert len(payload["modifiers"]) == 4

    def test_attack_power(self, make_blast_item):
        payload = Power.from_item_data(make_blast_item("b1", 2.5)).display()

        assert payload["categories"] == {"attack": {"dice": 2.5, "dice_string": "2½d6"}}
        assert payload["cost"] == 12.5


class TestWithFrameworkModifiers:
    """Test applying framework modifiers to a power."""

    def test_appends_slot_modifiers_after_own(self, telekinesis):
        armor_piercing = FrameworkModifier(
            PowerAdvantage("Armor Piercing", 0.5), FrameworkModifierScope.FRAMEWORK_AND_SLOTS
        )
        power = telekinesis.with_framework_modifiers([armor_piercing])

        assert power.advantages[0].name == "Area of Effect"
        assert power.advantages[1] is armor_piercing
        assert power.active_cost == 90
        assert power.real_cost == 60

    def test_skips_framework_only(self, telekinesis):
        focus = FrameworkModifier(
            PowerLimitation("Focus", -0.5), FrameworkModifierScope.FRAMEWORK_ONLY
        )
        power = telekinesis.with_framework_modifiers([focus])

        assert power.limitations == telekinesis.limitations

    def test_keeps_cost_override(self, telekinesis):
        slots_only = FrameworkModifier(
            PowerLimitation("Focus", -0.5), FrameworkModifierScope.SLOTS_ONLY
        )
        power = telekinesis.with_framework_modifiers([slots_only])

        assert power.cost == 45
        assert len(power.limitations) == 2

    def test_leaves_original_unchanged(self, telekinesis):
        telekinesis.with_framework_modifiers([
            FrameworkModifier(PowerAdvantage("Armor Piercing", 0.5)),
        ])
        assert len(telekinesis.advantages) == 1

    def test_rejects_plain_modifiers(self, telekinesis):
        with pytest.raises(PreconditionError, match="must be FrameworkModifiers"):
            apply_framework_modifiers(telekinesis, [PowerAdvantage("Armor Piercing", 0.5)])

    def test_unknown_wrapped_type(self, telekinesis):
        with pytest.raises(NotYetImplementedError):
            apply_framework_modifiers(
                telekinesis, [FrameworkModifier(PowerModifier("Odd", 1))]
            )
