"""
Tests for ability effect variants.
"""

import pytest

from ..card_schema.ability_effects import (
    AbilityEffectType,
    AbilityHealEffect,
    AbilityPreventDamageEffect,
    AbilityStatusConditionEffect,
    BoostAttackEffect,
    BoostHpEffect,
    DrawCardsEffect,
    ReduceDamageEffect,
    SearchDeckEffect,
    ability_effect_type,
    parse_ability_effect,
)
from ..card_schema.effect_base import MoveDamageCounterEffect, SwitchPokemonEffect
from ..card_schema.enums import Destination, Duration, StatusCondition, TargetType
from ..card_schema.errors import (
    CardDataError,
    InvalidEnumValueError,
    InvariantViolationError,
    MissingFieldError,
)


class TestAbilityEffectParsing:
    """Tests for building ability effects from wire data."""

    @pytest.mark.parametrize("data,expected_type", [
        ({"effectType": "DRAW_CARDS", "count": 2}, DrawCardsEffect),
        ({"effectType": "SEARCH_DECK", "count": 1, "destination": "bench"}, SearchDeckEffect),
        ({"effectType": "BOOST_ATTACK", "target": "all_yours", "modifier": 10}, BoostAttackEffect),
        ({"effectType": "BOOST_HP", "target": "benched_yours", "modifier": 20}, BoostHpEffect),
        ({"effectType": "REDUCE_DAMAGE", "target": "self", "amount": "all"}, ReduceDamageEffect),
        ({"effectType": "HEAL", "target": "all_yours", "amount": 10}, AbilityHealEffect),
        ({"effectType": "SWITCH_POKEMON", "selector": "random"}, SwitchPokemonEffect),
        ({
            "effectType": "MOVE_DAMAGE_COUNTER",
            "sourceTarget": "all_yours",
            "destinationTarget": "self",
            "amount": 1,
        }, MoveDamageCounterEffect),
    ])
    def test_each_kind_builds(self, data, expected_type):
        effect = parse_ability_effect(data)
        assert isinstance(effect, expected_type)
        assert ability_effect_type(effect) == AbilityEffectType(data["effectType"])

    def test_retrieve_from_discard(self):
        effect = parse_ability_effect({
            "effectType": "RETRIEVE_FROM_DISCARD",
            "count": 2,
            "selector": "choice",
            "cardType": "ENERGY",
        })
        assert effect.count == 2

    def test_attack_only_kind_rejected(self):
        """RECOIL_DAMAGE is not an ability effect."""
        with pytest.raises(InvalidEnumValueError):
            parse_ability_effect({"effectType": "RECOIL_DAMAGE", "amount": 10})

    def test_search_deck_requires_destination(self):
        with pytest.raises(MissingFieldError):
            parse_ability_effect({"effectType": "SEARCH_DECK", "count": 1})

    def test_discard_from_hand_requires_selector(self):
        with pytest.raises(MissingFieldError):
            parse_ability_effect({"effectType": "DISCARD_FROM_HAND", "count": "all"})

    def test_draw_count_positive(self):
        with pytest.raises(CardDataError):
            parse_ability_effect({"effectType": "DRAW_CARDS", "count": 0})


class TestAbilityTargets:
    """Abilities reach targets attacks cannot."""

    def test_heal_whole_board(self):
        effect = AbilityHealEffect(target=TargetType.ALL_YOURS, amount=10)
        assert effect.target == TargetType.ALL_YOURS

    def test_heal_cannot_target_opponent(self):
        with pytest.raises(InvalidEnumValueError):
            AbilityHealEffect(target=TargetType.ALL_OPPONENTS, amount=10)

    def test_permanent_damage_prevention(self):
        effect = AbilityPreventDamageEffect(target=TargetType.BENCHED_YOURS, duration=Duration.PERMANENT)
        assert effect.duration == Duration.PERMANENT

    def test_status_on_all_opponents(self):
        effect = AbilityStatusConditionEffect(
            target=TargetType.ALL_OPPONENTS, status_condition=StatusCondition.CONFUSED
        )
        assert effect.effect_type == "STATUS_CONDITION"

    def test_energy_acceleration_from_self(self):
        effect = parse_ability_effect({
            "effectType": "ENERGY_ACCELERATION",
            "target": "benched_yours",
            "source": "self",
            "count": 1,
        })
        assert effect.source.value == "self"

    def test_boost_modifier_nonzero(self):
        with pytest.raises(InvariantViolationError):
            BoostHpEffect(target=TargetType.SELF, modifier=0)

    def test_boost_cannot_target_opponents(self):
        with pytest.raises(InvalidEnumValueError):
            BoostAttackEffect(target=TargetType.DEFENDING, modifier=10)

    def test_search_destination(self):
        effect = SearchDeckEffect(count=1, destination=Destination.HAND)
        assert effect.destination == Destination.HAND
