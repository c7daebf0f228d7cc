"""
Ability effects - closed set of structured effects an ability can have.

Abilities share several kinds with attacks (HEAL, PREVENT_DAMAGE,
STATUS_CONDITION, ENERGY_ACCELERATION, SWITCH_POKEMON, MOVE_DAMAGE_COUNTER)
but reach wider targets, and add kinds of their own:

    DRAW_CARDS             count
    SEARCH_DECK            count, destination hand|bench, card_type?, pokemon_type?, selector?
    BOOST_ATTACK           target, modifier != 0, affected_types?
    BOOST_HP               target, modifier != 0
    REDUCE_DAMAGE          target, amount n|"all", source?
    DISCARD_FROM_HAND      count n|"all", selector, card_type?
    ATTACH_FROM_DISCARD    target, count, energy_type?, selector?
    RETRIEVE_FROM_DISCARD  count, selector, card_type?, pokemon_type?
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import Field, StrictInt, TypeAdapter, field_validator

from .base import validate_with
from .effect_base import (
    AmountOrAll,
    EffectModel,
    EnergyAccelerationEffect,
    HealEffect,
    MoveDamageCounterEffect,
    PositiveInt,
    PreventDamageEffect,
    StatusConditionEffect,
    SwitchPokemonEffect,
    TargetedEffect,
    nonzero_modifier,
)
from .enums import (
    CardType,
    Destination,
    Duration,
    EnergySource,
    EnergyType,
    PokemonType,
    Selector,
    TargetType,
)


class AbilityEffectType(str, Enum):
    """Kinds of ability effects."""
    HEAL = "HEAL"
    PREVENT_DAMAGE = "PREVENT_DAMAGE"
    STATUS_CONDITION = "STATUS_CONDITION"
    ENERGY_ACCELERATION = "ENERGY_ACCELERATION"
    SWITCH_POKEMON = "SWITCH_POKEMON"
    DRAW_CARDS = "DRAW_CARDS"
    SEARCH_DECK = "SEARCH_DECK"
    BOOST_ATTACK = "BOOST_ATTACK"
    BOOST_HP = "BOOST_HP"
    REDUCE_DAMAGE = "REDUCE_DAMAGE"
    DISCARD_FROM_HAND = "DISCARD_FROM_HAND"
    ATTACH_FROM_DISCARD = "ATTACH_FROM_DISCARD"
    RETRIEVE_FROM_DISCARD = "RETRIEVE_FROM_DISCARD"
    MOVE_DAMAGE_COUNTER = "MOVE_DAMAGE_COUNTER"


# Your own Pokemon, in any position
_YOUR_POKEMON = frozenset({
    TargetType.SELF,
    TargetType.ALL_YOURS,
    TargetType.BENCHED_YOURS,
    TargetType.ACTIVE_YOURS,
})


# =============================================================================
# Shared kinds with ability targeting
# =============================================================================

class AbilityHealEffect(HealEffect):
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON


class AbilityPreventDamageEffect(PreventDamageEffect):
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON | {TargetType.DEFENDING}
    allowed_durations: ClassVar[frozenset[Duration]] = frozenset(Duration)


class AbilityStatusConditionEffect(StatusConditionEffect):
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset({
        TargetType.DEFENDING,
        TargetType.ALL_OPPONENTS,
        TargetType.ACTIVE_OPPONENT,
    })


class AbilityEnergyAccelerationEffect(EnergyAccelerationEffect):
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON
    allowed_sources: ClassVar[frozenset[EnergySource]] = frozenset(EnergySource)


# =============================================================================
# Ability-only kinds
# =============================================================================

class DrawCardsEffect(EffectModel):
    """Draw cards."""
    effect_type: Literal["DRAW_CARDS"] = "DRAW_CARDS"
    count: PositiveInt


class SearchDeckEffect(EffectModel):
    """Search your deck for cards and put them in your hand or onto your bench."""
    effect_type: Literal["SEARCH_DECK"] = "SEARCH_DECK"
    count: PositiveInt
    destination: Destination
    card_type: Optional[CardType] = None
    pokemon_type: Optional[PokemonType] = None
    selector: Optional[Selector] = None


class BoostAttackEffect(TargetedEffect):
    """Your attacks do more (or less) damage."""
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON

    effect_type: Literal["BOOST_ATTACK"] = "BOOST_ATTACK"
    modifier: StrictInt
    affected_types: Optional[tuple[PokemonType, ...]] = None

    @field_validator("modifier")
    @classmethod
    def _modifier_nonzero(cls, value: int) -> int:
        return nonzero_modifier(value)


class BoostHpEffect(TargetedEffect):
    """Your Pokemon get more (or less) HP."""
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON

    effect_type: Literal["BOOST_HP"] = "BOOST_HP"
    modifier: StrictInt

    @field_validator("modifier")
    @classmethod
    def _modifier_nonzero(cls, value: int) -> int:
        return nonzero_modifier(value)


class ReduceDamageEffect(TargetedEffect):
    """Damage done to your Pokemon is reduced."""
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON

    effect_type: Literal["REDUCE_DAMAGE"] = "REDUCE_DAMAGE"
    amount: AmountOrAll
    source: Optional[PokemonType] = None


class DiscardFromHandEffect(EffectModel):
    """Discard cards from your hand, usually as a cost."""
    effect_type: Literal["DISCARD_FROM_HAND"] = "DISCARD_FROM_HAND"
    count: AmountOrAll
    selector: Selector
    card_type: Optional[CardType] = None


class AttachFromDiscardEffect(TargetedEffect):
    """Attach energy from your discard pile."""
    allowed_targets: ClassVar[frozenset[TargetType]] = _YOUR_POKEMON

    effect_type: Literal["ATTACH_FROM_DISCARD"] = "ATTACH_FROM_DISCARD"
    count: PositiveInt
    energy_type: Optional[EnergyType] = None
    selector: Optional[Selector] = None


class RetrieveFromDiscardEffect(EffectModel):
    """Put cards from your discard pile into your hand."""
    effect_type: Literal["RETRIEVE_FROM_DISCARD"] = "RETRIEVE_FROM_DISCARD"
    count: PositiveInt
    selector: Selector
    card_type: Optional[CardType] = None
    pokemon_type: Optional[PokemonType] = None


AbilityEffect = Annotated[
    Union[
        AbilityHealEffect,
        AbilityPreventDamageEffect,
        AbilityStatusConditionEffect,
        AbilityEnergyAccelerationEffect,
        SwitchPokemonEffect,
        DrawCardsEffect,
        SearchDeckEffect,
        BoostAttackEffect,
        BoostHpEffect,
        ReduceDamageEffect,
        DiscardFromHandEffect,
        AttachFromDiscardEffect,
        RetrieveFromDiscardEffect,
        MoveDamageCounterEffect,
    ],
    Field(discriminator="effect_type"),
]

_ABILITY_EFFECT_ADAPTER: TypeAdapter[AbilityEffect] = TypeAdapter(AbilityEffect)


def parse_ability_effect(data: Any) -> AbilityEffect:
    """Build an ability effect from JSON-shaped data."""
    return validate_with(_ABILITY_EFFECT_ADAPTER, data, "AbilityEffect")


def ability_effect_type(effect: AbilityEffect) -> AbilityEffectType:
    """The effect's kind as an enum member."""
    return AbilityEffectType(effect.effect_type)
