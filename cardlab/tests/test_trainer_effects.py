"""
Tests for trainer effects.
"""

import pytest

from ..card_schema.enums import TargetType
from ..card_schema.errors import CardDataError, InvalidEnumValueError, MissingFieldError
from ..card_schema.trainer_effects import (
    AmountTrainerEffect,
    BoardTrainerEffect,
    CardMovementTrainerEffect,
    DrawTrainerEffect,
    SearchTrainerEffect,
    TrainerEffectType,
    model_for_kind,
    parse_trainer_effect,
)


class TestTrainerEffectParsing:
    """Tests for building trainer effects from wire data."""

    def test_draw_cards(self):
        effect = parse_trainer_effect({"effectType": "DRAW_CARDS", "target": "self", "value": 7})
        assert isinstance(effect, DrawTrainerEffect)
        assert effect.kind == TrainerEffectType.DRAW_CARDS
        assert effect.numeric_value() == 7
        assert effect.describe() == "Draw 7 card(s)"

    def test_draw_requires_value(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_trainer_effect({"effectType": "DRAW_CARDS", "target": "self"})
        assert exc_info.value.field == "value"

    def test_printed_count_coerced(self):
        """Printed trainer counts are coerced to ints."""
        effect = parse_trainer_effect({"effectType": "DRAW_CARDS", "target": "self", "value": "3"})
        assert effect.value == 3

    def test_opponent_draws_value_optional(self):
        effect = parse_trainer_effect({"effectType": "OPPONENT_DRAWS", "target": "active_opponent"})
        assert isinstance(effect, CardMovementTrainerEffect)
        assert effect.value is None

    def test_heal_amount(self):
        effect = parse_trainer_effect({"effectType": "HEAL", "target": "self", "value": 20})
        assert isinstance(effect, AmountTrainerEffect)
        assert effect.describe() == "Remove up to 20 damage counter(s)"

    def test_search_requires_card_type(self):
        with pytest.raises(MissingFieldError):
            parse_trainer_effect({"effectType": "SEARCH_DECK", "target": "self", "value": 1})

    def test_search_deck(self):
        effect = parse_trainer_effect({
            "effectType": "SEARCH_DECK",
            "target": "self",
            "cardType": "Basic Pokémon",
        })
        assert isinstance(effect, SearchTrainerEffect)
        assert effect.numeric_value() == 0
        assert "Basic Pokémon" in effect.describe()

    def test_switch_active(self):
        effect = parse_trainer_effect({"effectType": "SWITCH_ACTIVE", "target": "active_yours"})
        assert isinstance(effect, BoardTrainerEffect)
        assert effect.describe() == "Switch your Active Pokémon"

    def test_board_effect_takes_no_value(self):
        with pytest.raises(CardDataError):
            parse_trainer_effect({"effectType": "CURE_STATUS", "target": "self", "value": 2})

    def test_description_wins(self):
        effect = parse_trainer_effect({
            "effectType": "CURE_STATUS",
            "target": "active_yours",
            "description": "Remove all Special Conditions from your Active Pokémon",
        })
        assert effect.describe().startswith("Remove all Special")

    def test_unknown_kind(self):
        with pytest.raises(InvalidEnumValueError):
            parse_trainer_effect({"effectType": "TIME_TRAVEL", "target": "self"})

    def test_target_required(self):
        with pytest.raises(MissingFieldError):
            parse_trainer_effect({"effectType": "SHUFFLE_DECK"})


class TestTrainerEffectKinds:
    """Tests for the kind index."""

    @pytest.mark.parametrize("kind", list(TrainerEffectType))
    def test_every_kind_has_a_model(self, kind):
        model = model_for_kind(kind)
        assert kind.value in model.model_fields["effect_type"].annotation.__args__

    @pytest.mark.parametrize("kind,costs", [
        (TrainerEffectType.DISCARD_HAND, True),
        (TrainerEffectType.DISCARD_ENERGY, True),
        (TrainerEffectType.TRADE_CARDS, True),
        (TrainerEffectType.DRAW_CARDS, False),
        (TrainerEffectType.HEAL, False),
    ])
    def test_requires_cost(self, kind, costs):
        data = {"effectType": kind.value, "target": "self"}
        if model_for_kind(kind) in (DrawTrainerEffect, AmountTrainerEffect):
            data["value"] = 1
        assert parse_trainer_effect(data).requires_cost() is costs

    def test_discard_all(self):
        effect = CardMovementTrainerEffect(
            effect_type="DISCARD_HAND", target=TargetType.SELF, value="all"
        )
        assert effect.numeric_value() == 0
        assert effect.describe() == "DISCARD_HAND"
