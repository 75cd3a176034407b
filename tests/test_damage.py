"""
Tests for damage dice and Damage Class conversion.
"""

import pytest
from champions.errors import DamageError, PreconditionError
from champions.rules.damage import (
    Damage,
    DieAdjustment,
    count_killing_body,
    count_killing_damage,
    count_killing_stun,
    count_normal_body,
    count_normal_damage,
    count_normal_stun,
)


def valid_damages(ap_per_die, max_dice=12):
    """Every Damage the column can express up to `max_dice` whole dice."""
    for base_dice in range(max_dice + 1):
        for adjustment in DieAdjustment:
            try:
                damage = Damage(base_dice, ap_per_die, adjustment)
            except DamageError:
                continue
            yield damage


class TestDamageConstruction:
    """Test Damage validation."""

    def test_defaults_to_five_ap_full_dice(self):
        damage = Damage(3)

        assert damage.ap_per_die == 5
        assert damage.adjustment == DieAdjustment.FULL

    def test_accepts_raw_adjustment_numbers(self):
        """Plain numbers are read as adjustments."""
        assert Damage(2, 5, 0.5).adjustment == DieAdjustment.HALF
        assert Damage(2, 15, 1).adjustment == DieAdjustment.PLUS_ONE

    def test_rejects_fractional_base_dice(self):
        with pytest.raises(DamageError, match="whole number"):
            Damage(2.5)

    def test_rejects_negative_base_dice(self):
        with pytest.raises(DamageError, match="negative"):
            Damage(-1)

    def test_rejects_unknown_adjustment(self):
        with pytest.raises(DamageError):
            Damage(1, 5, 0.25)

    def test_rejects_non_positive_ap_per_die(self):
        with pytest.raises(DamageError):
            Damage(1, 0)

    def test_rejects_combinations_the_table_cannot_express(self):
        """10 AP per die has no +1 step."""
        with pytest.raises(DamageError) as excinfo:
            Damage(1, 10, DieAdjustment.PLUS_ONE)

        assert excinfo.value.ap_per_die == 10

    def test_damage_error_is_a_precondition(self):
        with pytest.raises(PreconditionError):
            Damage(1, 10, DieAdjustment.PLUS_ONE)

    def test_accepts_dice_between_table_steps(self):
        assert Damage(1, 6.25).dice_string == "1d6"
        assert Damage(1, 22.5, DieAdjustment.HALF_MINUS_ONE).dice == pytest.approx(1.4)

    def test_equal_by_value(self):
        assert Damage(2, 5) == Damage.from_dice(2, 5)


class TestDiceDisplay:
    """Test dice counts and strings."""

    def test_decimal_dice(self):
        assert Damage(2, 5, DieAdjustment.HALF).dice == 2.5
        assert Damage(2, 22.5, DieAdjustment.HALF_MINUS_ONE).dice == pytest.approx(2.4)
        assert Damage(2, 15, DieAdjustment.PLUS_ONE).dice == pytest.approx(2.1)
        assert Damage(1, 20, DieAdjustment.MINUS_ONE).dice == pytest.approx(0.9)

    def test_dice_strings(self):
        assert Damage(3).dice_string == "3d6"
        assert Damage(2, 5, DieAdjustment.HALF).dice_string == "2½d6"
        assert Damage(4, 15, DieAdjustment.PLUS_ONE).dice_string == "4d6+1"
        assert Damage(1, 20, DieAdjustment.MINUS_ONE).dice_string == "1d6-1"
        assert Damage(2, 22.5, DieAdjustment.HALF_MINUS_ONE).dice_string == "2½d6-1"

    def test_lone_half_die_has_no_zero(self):
        assert Damage(0, 5, DieAdjustment.HALF).dice_string == "½d6"

    def test_has_half(self):
        assert Damage(1, 5, DieAdjustment.HALF).has_half
        assert Damage(0, 22.5, DieAdjustment.HALF_MINUS_ONE).has_half
        assert not Damage(1, 15, DieAdjustment.PLUS_ONE).has_half

    def test_plus_or_minus(self):
        assert Damage(1, 15, DieAdjustment.PLUS_ONE).plus_or_minus == 1
        assert Damage(1, 20, DieAdjustment.MINUS_ONE).plus_or_minus == -1
        assert Damage(0, 22.5, DieAdjustment.HALF_MINUS_ONE).plus_or_minus == -1
        assert Damage(1, 5, DieAdjustment.HALF).plus_or_minus == 0


class TestDamageClasses:
    """Test dc for each AP-per-die column."""

    def test_five_ap_is_one_dc_per_die(self):
        assert Damage(5, 5).dc == 5
        assert Damage(2, 5, DieAdjustment.HALF).dc == 2.5

    def test_no_dice_is_no_dc(self):
        assert Damage(0, 15).dc == 0

    def test_ten_ap(self):
        assert Damage(0, 10, DieAdjustment.HALF).dc == 1
        assert Damage(1, 10).dc == 2
        assert Damage(1, 10, DieAdjustment.HALF).dc == 3

    def test_fifteen_ap(self):
        assert Damage(0, 15, DieAdjustment.PLUS_ONE).dc == 1
        assert Damage(0, 15, DieAdjustment.HALF).dc == 2
        assert Damage(1, 15).dc == 3

    def test_dice_between_steps_are_fractional(self):
        """Whole dice at face value, plus the first step with the adjustment."""
        assert Damage(1, 6.25).dc == 1.25
        assert Damage(1, 22.5, DieAdjustment.HALF_MINUS_ONE).dc == 6.5

    def test_on_step_dice_are_unchanged(self):
        assert Damage(1, 6.25, DieAdjustment.HALF).dc == 2
        assert Damage(0, 22.5, DieAdjustment.HALF_MINUS_ONE).dc == 2

    def test_unsupported_ap_uses_started_dice(self):
        """Aid at 6 AP per die has no DC column."""
        assert not Damage.supports_ap_per_die(6)
        assert Damage(3, 6).dc == 18
        assert Damage(3, 6, DieAdjustment.PLUS_ONE).dc == 24


class TestFromDcs:
    """Test Damage.from_dcs."""

    @pytest.mark.parametrize("dc,ap_per_die,dice", [
        (7, 6.25, 5.5),
        (7, 7.5, 4.5),
        (3, 10, 1.5),
        (6, 12.5, 2.1),
        (4, 15, 1.1),
        (3, 20, 0.9),
        (11, 22.5, 2.4),
    ])
    def test_table_columns(self, dc, ap_per_die, dice):
        damage = Damage.from_dcs(dc, ap_per_die)

        assert damage.dice == pytest.approx(dice)
        assert damage.dc == dc

    def test_five_ap_halves(self):
        assert Damage.from_dcs(4.5, 5) == Damage(4, 5, DieAdjustment.HALF)

    def test_zero_or_less_is_no_dice(self):
        assert Damage.from_dcs(0, 10).dice == 0
        assert Damage.from_dcs(-3, 10).dice == 0

    def test_rejects_fractional_dc_on_table_columns(self):
        with pytest.raises(DamageError, match="whole number of DC"):
            Damage.from_dcs(2.5, 10)

    def test_rejects_quarter_dc_at_five_ap(self):
        with pytest.raises(DamageError):
            Damage.from_dcs(2.25, 5)

    def test_unsupported_ap_rounds_up_to_whole_dice(self):
        assert Damage.from_dcs(18, 6) == Damage(3, 6)
        assert Damage.from_dcs(20, 6) == Damage(4, 6)

    @pytest.mark.parametrize("ap_per_die", [5, 6, 10, 15])
    def test_inverts_dc(self, ap_per_die):
        for damage in valid_damages(ap_per_die):
            assert Damage.from_dcs(damage.dc, ap_per_die).dc == damage.dc, damage


class TestAddDamageClasses:
    """Test Damage.add_damage_classes."""

    def test_ten_ap(self):
        assert Damage(2, 10).add_damage_classes(1).dice == 2.5

    def test_fifteen_ap(self):
        assert Damage(2, 15).add_damage_classes(2).dice == 2.5
        assert Damage(2, 15).add_damage_classes(1).dice == pytest.approx(2.1)
        assert Damage(2, 15, DieAdjustment.PLUS_ONE).add_damage_classes(1).dice == 2.5

    def test_subtracting(self):
        assert Damage(2, 22.5).add_damage_classes(-7).dice == pytest.approx(0.4)
        assert Damage(4, 5, DieAdjustment.HALF).add_damage_classes(-1).dice == 3.5

    def test_five_ap_keeps_half(self):
        assert Damage(4, 5, DieAdjustment.HALF).add_damage_classes(4).dice == 8.5

    def test_keeps_ap_per_die(self):
        assert Damage(2, 15).add_damage_classes(3).ap_per_die == 15

    def test_dice_between_steps_settle_on_the_step_below(self):
        assert Damage(1, 6.25).add_damage_classes(1) == Damage(1, 6.25, DieAdjustment.HALF)
        assert Damage(1, 6.25).add_damage_classes(-1) == Damage(0, 6.25)


class TestFromDice:
    """Test Damage.from_dice parsing."""

    def test_whole_dice(self):
        assert Damage.from_dice(3) == Damage(3)

    def test_point_nine_is_next_die_minus_one(self):
        damage = Damage.from_dice(3.9)

        assert damage.base_dice == 4
        assert damage.adjustment == DieAdjustment.MINUS_ONE

    def test_half_minus_one(self):
        assert Damage.from_dice(2.4, 22.5).dice_string == "2½d6-1"

    def test_plus_one(self):
        assert Damage.from_dice(1.1, 15) == Damage(1, 15, DieAdjustment.PLUS_ONE)

    @pytest.mark.parametrize("fraction", [0, 0.1, 0.4, 0.5, 0.9])
    def test_reads_back_its_dice(self, fraction):
        for whole in range(13):
            dice = whole + fraction
            assert Damage.from_dice(dice).dice == pytest.approx(dice)

    def test_rejects_other_fractions(self):
        with pytest.raises(DamageError, match="does not encode"):
            Damage.from_dice(2.3)

    def test_rejects_negative(self):
        with pytest.raises(DamageError):
            Damage.from_dice(-1)


class TestCounting:
    """Test counting BODY and STUN from rolled faces."""

    def test_normal_body(self):
        """1s count 0, 6s count 2, the rest 1."""
        assert count_normal_body([1, 6, 3]) == 3

    def test_normal_body_half_die(self):
        assert count_normal_body([2], half_die=4) == 2
        assert count_normal_body([2], half_die=3) == 1

    def test_normal_stun(self):
        assert count_normal_stun([1, 6, 3], half_die=5, plus_or_minus=1) == 14

    def test_normal_damage_uses_half_die_only_when_rolled(self):
        assert count_normal_damage(Damage(2, 5, DieAdjustment.HALF), [6, 2], half_die=4) == (4, 10)
        assert count_normal_damage(Damage(2), [6, 2], half_die=4) == (3, 8)

    def test_killing_body(self):
        assert count_killing_body([2, 5], half_die=3) == 9

    def test_killing_stun(self):
        assert count_killing_stun(9, 3) == 27

    def test_killing_damage(self):
        damage = Damage(1, 15, DieAdjustment.PLUS_ONE)

        assert count_killing_damage(damage, [4], multiplier=2) == (5, 10)
