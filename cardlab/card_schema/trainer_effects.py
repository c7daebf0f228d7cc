"""
Trainer effects - what playing a Trainer card does.

Every trainer effect names a target and may carry a free-text condition and
description. Kinds that share a payload shape share a model, but each kind
still maps to exactly one model:

- DrawTrainerEffect         DRAW_CARDS, LOOK_AT_DECK: value (card count) required
- AmountTrainerEffect       HEAL, INCREASE_DAMAGE, REDUCE_DAMAGE: value required
- SearchTrainerEffect       SEARCH_DECK, RETRIEVE_FROM_DISCARD, RETRIEVE_ENERGY:
                            card_type required
- CardMovementTrainerEffect discards, returns, trades: optional value and card_type
- BoardTrainerEffect        switches, evolution, status cures: no payload
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import Field, TypeAdapter

from .base import CardValueModel, validate_with
from .enums import TargetType

# Trainer values are lax: printed counts like "2" coerce to ints
TrainerCount = Annotated[int, Field(ge=1)]
TrainerAmount = Union[TrainerCount, Literal["all"]]


class TrainerEffectType(str, Enum):
    """Kinds of trainer effects."""
    # Deck and hand
    DRAW_CARDS = "DRAW_CARDS"
    SEARCH_DECK = "SEARCH_DECK"
    SHUFFLE_DECK = "SHUFFLE_DECK"
    LOOK_AT_DECK = "LOOK_AT_DECK"
    DISCARD_HAND = "DISCARD_HAND"
    RETRIEVE_FROM_DISCARD = "RETRIEVE_FROM_DISCARD"
    OPPONENT_DISCARDS = "OPPONENT_DISCARDS"

    # Pokemon manipulation
    SWITCH_ACTIVE = "SWITCH_ACTIVE"
    RETURN_TO_HAND = "RETURN_TO_HAND"
    RETURN_TO_DECK = "RETURN_TO_DECK"
    FORCE_SWITCH = "FORCE_SWITCH"
    EVOLVE_POKEMON = "EVOLVE_POKEMON"
    DEVOLVE_POKEMON = "DEVOLVE_POKEMON"
    PUT_INTO_PLAY = "PUT_INTO_PLAY"

    # Healing and status
    HEAL = "HEAL"
    CURE_STATUS = "CURE_STATUS"

    # Energy
    REMOVE_ENERGY = "REMOVE_ENERGY"
    RETRIEVE_ENERGY = "RETRIEVE_ENERGY"
    DISCARD_ENERGY = "DISCARD_ENERGY"

    # Damage
    INCREASE_DAMAGE = "INCREASE_DAMAGE"
    REDUCE_DAMAGE = "REDUCE_DAMAGE"

    # Opponent
    OPPONENT_DRAWS = "OPPONENT_DRAWS"
    OPPONENT_SHUFFLES_HAND = "OPPONENT_SHUFFLES_HAND"

    # Special
    TRADE_CARDS = "TRADE_CARDS"
    ATTACH_TO_POKEMON = "ATTACH_TO_POKEMON"


_COST_EFFECTS = frozenset({
    TrainerEffectType.DISCARD_HAND,
    TrainerEffectType.DISCARD_ENERGY,
    TrainerEffectType.TRADE_CARDS,
})


class TrainerEffectModel(CardValueModel):
    """Fields common to every trainer effect."""
    target: TargetType
    condition: Optional[str] = None
    description: Optional[str] = None

    @property
    def kind(self) -> TrainerEffectType:
        return TrainerEffectType(self.effect_type)

    def requires_cost(self) -> bool:
        """True if playing this effect costs the player cards."""
        return self.kind in _COST_EFFECTS

    def numeric_value(self) -> int:
        value = getattr(self, "value", None)
        return value if isinstance(value, int) else 0

    def describe(self) -> str:
        if self.description:
            return self.description
        return self.kind.value


class DrawTrainerEffect(TrainerEffectModel):
    effect_type: Literal["DRAW_CARDS", "LOOK_AT_DECK"]
    value: TrainerCount

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.kind == TrainerEffectType.DRAW_CARDS:
            return f"Draw {self.value} card(s)"
        return f"Look at the top {self.value} card(s) of your deck"


class AmountTrainerEffect(TrainerEffectModel):
    effect_type: Literal["HEAL", "INCREASE_DAMAGE", "REDUCE_DAMAGE"]
    value: TrainerCount

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.kind == TrainerEffectType.HEAL:
            return f"Remove up to {self.value} damage counter(s)"
        return super().describe()


class SearchTrainerEffect(TrainerEffectModel):
    effect_type: Literal["SEARCH_DECK", "RETRIEVE_FROM_DISCARD", "RETRIEVE_ENERGY"]
    card_type: str = Field(min_length=1)
    value: Optional[TrainerAmount] = None

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.kind == TrainerEffectType.SEARCH_DECK:
            return f"Search your deck for a {self.card_type} card"
        return super().describe()


class CardMovementTrainerEffect(TrainerEffectModel):
    effect_type: Literal[
        "DISCARD_HAND",
        "DISCARD_ENERGY",
        "REMOVE_ENERGY",
        "OPPONENT_DISCARDS",
        "OPPONENT_DRAWS",
        "TRADE_CARDS",
        "RETURN_TO_HAND",
        "RETURN_TO_DECK",
        "PUT_INTO_PLAY",
    ]
    value: Optional[TrainerAmount] = None
    card_type: Optional[str] = None


class BoardTrainerEffect(TrainerEffectModel):
    effect_type: Literal[
        "SHUFFLE_DECK",
        "SWITCH_ACTIVE",
        "FORCE_SWITCH",
        "EVOLVE_POKEMON",
        "DEVOLVE_POKEMON",
        "CURE_STATUS",
        "OPPONENT_SHUFFLES_HAND",
        "ATTACH_TO_POKEMON",
    ]

    def describe(self) -> str:
        if self.description:
            return self.description
        if self.kind == TrainerEffectType.SWITCH_ACTIVE:
            return "Switch your Active Pokémon"
        if self.kind == TrainerEffectType.CURE_STATUS:
            return "Remove all status conditions"
        return super().describe()


_TRAINER_EFFECT_MODELS = (
    DrawTrainerEffect,
    AmountTrainerEffect,
    SearchTrainerEffect,
    CardMovementTrainerEffect,
    BoardTrainerEffect,
)

TrainerEffect = Annotated[
    Union[
        DrawTrainerEffect,
        AmountTrainerEffect,
        SearchTrainerEffect,
        CardMovementTrainerEffect,
        BoardTrainerEffect,
    ],
    Field(discriminator="effect_type"),
]

_TRAINER_EFFECT_ADAPTER: TypeAdapter[TrainerEffect] = TypeAdapter(TrainerEffect)


def model_for_kind(kind: TrainerEffectType) -> type[TrainerEffectModel]:
    """The model that carries a given trainer effect kind."""
    return _MODEL_BY_KIND[kind]


def parse_trainer_effect(data: Any) -> TrainerEffect:
    """Build a trainer effect from JSON-shaped data."""
    return validate_with(_TRAINER_EFFECT_ADAPTER, data, "TrainerEffect")


def _index_models() -> dict[TrainerEffectType, type[TrainerEffectModel]]:
    index: dict[TrainerEffectType, type[TrainerEffectModel]] = {}
    for model in _TRAINER_EFFECT_MODELS:
        for tag in get_args(model.model_fields["effect_type"].annotation):
            kind = TrainerEffectType(tag)
            if kind in index:
                raise RuntimeError(f"Trainer effect {tag} mapped to two models")
            index[kind] = model
    missing = set(TrainerEffectType) - set(index)
    if missing:
        raise RuntimeError(
            "Trainer effect kinds without a model: " + ", ".join(sorted(k.value for k in missing))
        )
    return index


_MODEL_BY_KIND = _index_models()
