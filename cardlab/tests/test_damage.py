"""
Tests for the damage mini-language.

Tests:
- Parsing each damage form
- Expected values
- Formatting back to printed text
- Rejecting malformed strings
"""

import pytest

from ..card_schema.damage import (
    CoinFlipDamage,
    CompoundDamage,
    EnergyBonusDamage,
    FlatDamage,
    NoDamage,
    expected_damage,
    format_damage,
    parse_damage,
)
from ..card_schema.errors import InvalidFormatError


class TestParseDamage:
    """Tests for parsing printed damage strings."""

    def test_flat(self):
        """Plain numbers are flat damage."""
        assert parse_damage("30") == FlatDamage(amount=30)

    def test_coin_flip(self):
        """A trailing × means damage on heads only."""
        assert parse_damage("20×") == CoinFlipDamage(amount=20)

    def test_coin_flip_ascii_x(self):
        """An ASCII x is accepted for ×."""
        assert parse_damage("20x") == CoinFlipDamage(amount=20)

    def test_energy_bonus_keeps_cap(self):
        """A trailing + is energy-bonus damage with the attack's cap."""
        damage = parse_damage("40+", energy_bonus_cap=2)
        assert damage == EnergyBonusDamage(base=40, cap=2)
        assert damage.max_damage == 60

    def test_compound(self):
        """a+b is a compound sum."""
        assert parse_damage("30+20") == CompoundDamage(parts=(30, 20))

    @pytest.mark.parametrize("text", [None, "", "0", "  "])
    def test_no_damage(self, text):
        """Empty and zero damage parse to NoDamage."""
        assert isinstance(parse_damage(text), NoDamage)

    @pytest.mark.parametrize("text", ["abc", "-10", "20×+", "+20", "30++20"])
    def test_malformed_rejected(self, text):
        """Anything outside the grammar is a format error."""
        with pytest.raises(InvalidFormatError):
            parse_damage(text)


class TestExpectedDamage:
    """Tests for closed-form expected damage."""

    def test_documented_values(self):
        """Expected values for each form."""
        assert expected_damage("30") == 30
        assert expected_damage("20×") == 10
        assert expected_damage("40+", energy_bonus_cap=2) == 50
        assert expected_damage("30+20") == 50

    def test_energy_bonus_without_cap_is_base(self):
        """Without a cap only the base damage counts."""
        assert expected_damage("40+") == 40

    def test_no_damage_is_zero(self):
        assert expected_damage("") == 0


class TestFormatDamage:
    """Tests for rendering parsed damage."""

    @pytest.mark.parametrize("text", ["30", "20×", "40+", "30+20", ""])
    def test_printed_form_restored(self, text):
        """Formatting a parsed string gives the printed string back."""
        assert format_damage(parse_damage(text)) == text

    def test_ascii_x_rendered_as_times_sign(self):
        assert format_damage(parse_damage("20x")) == "20×"
