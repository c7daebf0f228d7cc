"""
Card rules - passive, always-on modifiers printed on a card.

A rule is different from an ability: it is never activated, it simply
holds ("This Pokemon can't retreat", "Prevent all effects of attacks").
Rules are grouped into eight categories, carry a priority that an
external engine uses to order them, and may carry category-specific
metadata.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, StrictInt, field_validator, model_validator

from .base import CardValueModel
from .condition import Condition
from .enums import EnergyType, StatusCondition
from .errors import invariant_error


class RuleCategory(str, Enum):
    """Rule families; each rule kind belongs to exactly one."""
    MOVEMENT = "movement"
    ATTACK = "attack"
    DAMAGE = "damage"
    STATUS = "status"
    PRIZE = "prize"
    EVOLUTION = "evolution"
    PLAY = "play"
    ENERGY = "energy"


class CardRuleType(str, Enum):
    """Kinds of passive card rules."""
    # Movement
    CANNOT_RETREAT = "CANNOT_RETREAT"
    FORCED_SWITCH = "FORCED_SWITCH"
    FREE_RETREAT = "FREE_RETREAT"

    # Attack
    CANNOT_ATTACK = "CANNOT_ATTACK"
    ATTACK_COST_MODIFICATION = "ATTACK_COST_MODIFICATION"
    ATTACK_RESTRICTION = "ATTACK_RESTRICTION"

    # Damage
    DAMAGE_IMMUNITY = "DAMAGE_IMMUNITY"
    DAMAGE_REDUCTION_RULE = "DAMAGE_REDUCTION_RULE"
    INCREASED_DAMAGE_TAKEN = "INCREASED_DAMAGE_TAKEN"

    # Status
    STATUS_IMMUNITY = "STATUS_IMMUNITY"
    EFFECT_IMMUNITY = "EFFECT_IMMUNITY"
    CANNOT_BE_CONFUSED = "CANNOT_BE_CONFUSED"

    # Prize
    EXTRA_PRIZE_CARDS = "EXTRA_PRIZE_CARDS"
    NO_PRIZE_CARDS = "NO_PRIZE_CARDS"

    # Evolution
    CAN_EVOLVE_TURN_ONE = "CAN_EVOLVE_TURN_ONE"
    CANNOT_EVOLVE = "CANNOT_EVOLVE"
    SKIP_EVOLUTION_STAGE = "SKIP_EVOLUTION_STAGE"

    # Play
    PLAY_RESTRICTION = "PLAY_RESTRICTION"
    ONCE_PER_GAME = "ONCE_PER_GAME"
    DISCARD_AFTER_USE = "DISCARD_AFTER_USE"

    # Energy
    ENERGY_COST_REDUCTION = "ENERGY_COST_REDUCTION"
    EXTRA_ENERGY_ATTACHMENT = "EXTRA_ENERGY_ATTACHMENT"
    ENERGY_TYPE_CHANGE = "ENERGY_TYPE_CHANGE"


class RulePriority(str, Enum):
    """Order in which simultaneously applicable rules are considered."""
    HIGHEST = "HIGHEST"
    HIGH = "HIGH"
    NORMAL = "NORMAL"
    LOW = "LOW"
    LOWEST = "LOWEST"


_PRIORITY_RANK: dict[RulePriority, int] = {
    RulePriority.HIGHEST: 5,
    RulePriority.HIGH: 4,
    RulePriority.NORMAL: 3,
    RulePriority.LOW: 2,
    RulePriority.LOWEST: 1,
}

_RULE_CATEGORIES: dict[CardRuleType, RuleCategory] = {
    CardRuleType.CANNOT_RETREAT: RuleCategory.MOVEMENT,
    CardRuleType.FORCED_SWITCH: RuleCategory.MOVEMENT,
    CardRuleType.FREE_RETREAT: RuleCategory.MOVEMENT,
    CardRuleType.CANNOT_ATTACK: RuleCategory.ATTACK,
    CardRuleType.ATTACK_COST_MODIFICATION: RuleCategory.ATTACK,
    CardRuleType.ATTACK_RESTRICTION: RuleCategory.ATTACK,
    CardRuleType.DAMAGE_IMMUNITY: RuleCategory.DAMAGE,
    CardRuleType.DAMAGE_REDUCTION_RULE: RuleCategory.DAMAGE,
    CardRuleType.INCREASED_DAMAGE_TAKEN: RuleCategory.DAMAGE,
    CardRuleType.STATUS_IMMUNITY: RuleCategory.STATUS,
    CardRuleType.EFFECT_IMMUNITY: RuleCategory.STATUS,
    CardRuleType.CANNOT_BE_CONFUSED: RuleCategory.STATUS,
    CardRuleType.EXTRA_PRIZE_CARDS: RuleCategory.PRIZE,
    CardRuleType.NO_PRIZE_CARDS: RuleCategory.PRIZE,
    CardRuleType.CAN_EVOLVE_TURN_ONE: RuleCategory.EVOLUTION,
    CardRuleType.CANNOT_EVOLVE: RuleCategory.EVOLUTION,
    CardRuleType.SKIP_EVOLUTION_STAGE: RuleCategory.EVOLUTION,
    CardRuleType.PLAY_RESTRICTION: RuleCategory.PLAY,
    CardRuleType.ONCE_PER_GAME: RuleCategory.PLAY,
    CardRuleType.DISCARD_AFTER_USE: RuleCategory.PLAY,
    CardRuleType.ENERGY_COST_REDUCTION: RuleCategory.ENERGY,
    CardRuleType.EXTRA_ENERGY_ATTACHMENT: RuleCategory.ENERGY,
    CardRuleType.ENERGY_TYPE_CHANGE: RuleCategory.ENERGY,
}

if set(_PRIORITY_RANK) != set(RulePriority):
    raise RuntimeError("Every RulePriority needs a rank")
if set(_RULE_CATEGORIES) != set(CardRuleType):
    raise RuntimeError("Every CardRuleType needs a category")


def priority_rank(priority: RulePriority) -> int:
    """Numeric rank of a priority, HIGHEST=5 down to LOWEST=1."""
    return _PRIORITY_RANK[priority]


def rule_category(rule_type: CardRuleType) -> RuleCategory:
    return _RULE_CATEGORIES[rule_type]


# =============================================================================
# Metadata, one model per category
# =============================================================================

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]


class MovementRuleMetadata(CardValueModel):
    category: Literal["movement"] = "movement"
    allowed_actions: Optional[tuple[str, ...]] = None
    switch_target: Optional[Literal["benched", "random"]] = None


class AttackRuleMetadata(CardValueModel):
    category: Literal["attack"] = "attack"
    cost_reduction: Optional[NonNegativeInt] = None
    cost_increase: Optional[NonNegativeInt] = None
    affected_attacks: Optional[tuple[str, ...]] = None
    per_condition: Optional[str] = None


class DamageRuleMetadata(CardValueModel):
    category: Literal["damage"] = "damage"
    # Pokemon types or subtypes such as "EX" and "GX"
    immune_from: Optional[tuple[str, ...]] = None
    reduction_amount: Optional[NonNegativeInt] = None
    increase_amount: Optional[NonNegativeInt] = None
    immune_from_subtype: Optional[str] = None


class StatusRuleMetadata(CardValueModel):
    category: Literal["status"] = "status"
    immune_status: Optional[tuple[StatusCondition, ...]] = None
    effect_types: Optional[tuple[str, ...]] = None


class PrizeRuleMetadata(CardValueModel):
    category: Literal["prize"] = "prize"
    prize_count: Optional[NonNegativeInt] = None


class EvolutionRuleMetadata(CardValueModel):
    category: Literal["evolution"] = "evolution"
    allow_first_turn: Optional[bool] = None
    skip_stages: Optional[Annotated[StrictInt, Field(ge=1)]] = None
    allowed_evolutions: Optional[tuple[str, ...]] = None


class PlayRuleMetadata(CardValueModel):
    category: Literal["play"] = "play"
    restriction: Optional[str] = None
    discard_timing: Optional[Literal["after_use", "end_of_turn"]] = None
    usage_limit: Optional[Literal["once_per_game", "once_per_turn"]] = None


class EnergyRuleMetadata(CardValueModel):
    category: Literal["energy"] = "energy"
    cost_reduction: Optional[NonNegativeInt] = None
    per_condition: Optional[str] = None
    energy_type: Optional[EnergyType] = None
    change_to_type: Optional[EnergyType] = None
    extra_attachments: Optional[Annotated[StrictInt, Field(ge=1)]] = None


RuleMetadata = Annotated[
    Union[
        MovementRuleMetadata,
        AttackRuleMetadata,
        DamageRuleMetadata,
        StatusRuleMetadata,
        PrizeRuleMetadata,
        EvolutionRuleMetadata,
        PlayRuleMetadata,
        EnergyRuleMetadata,
    ],
    Field(discriminator="category"),
]


class CardRule(CardValueModel):
    """A passive rule printed on a card."""
    rule_type: CardRuleType
    text: str = Field(min_length=1)
    conditions: Optional[tuple[Condition, ...]] = None
    priority: RulePriority = RulePriority.NORMAL
    metadata: Optional[RuleMetadata] = None

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise invariant_error("Rule text is required")
        return value

    @model_validator(mode="after")
    def _metadata_fits_rule(self) -> "CardRule":
        if self.metadata is None:
            return self
        expected = rule_category(self.rule_type)
        if self.metadata.category != expected.value:
            raise invariant_error(
                f"{self.rule_type.value} takes {expected.value} metadata, "
                f"got {self.metadata.category}"
            )
        if (
            isinstance(self.metadata, PrizeRuleMetadata)
            and self.rule_type != CardRuleType.NO_PRIZE_CARDS
            and self.metadata.prize_count is not None
            and self.metadata.prize_count < 1
        ):
            raise invariant_error("Prize count must be at least 1")
        return self

    @property
    def category(self) -> RuleCategory:
        return rule_category(self.rule_type)

    @property
    def priority_value(self) -> int:
        return priority_rank(self.priority)

    def has_conditions(self) -> bool:
        return bool(self.conditions)

    def has_metadata(self) -> bool:
        return self.metadata is not None


def sort_by_priority(rules) -> list[CardRule]:
    """
    Rules ordered from highest to lowest priority.

    The sort is stable: rules with equal priority keep their original order.
    """
    return sorted(rules, key=lambda rule: -rule.priority_value)


# =============================================================================
# Factory functions for common rules
# =============================================================================

def _conditions(conditions: Optional[list[Condition]]) -> Optional[tuple[Condition, ...]]:
    return tuple(conditions) if conditions else None


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("s" if count > 1 else "")


def cannot_retreat_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.CANNOT_RETREAT,
        text="This Pokémon can't retreat",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=MovementRuleMetadata(),
    )


def free_retreat_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.FREE_RETREAT,
        text="This Pokémon's Retreat Cost is 0",
        conditions=_conditions(conditions),
        metadata=MovementRuleMetadata(),
    )


def forced_switch_rule(
    switch_target: str = "benched",
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.FORCED_SWITCH,
        text="Switch this Pokémon after certain actions",
        conditions=_conditions(conditions),
        metadata=MovementRuleMetadata(switch_target=switch_target),
    )


def cannot_attack_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.CANNOT_ATTACK,
        text="This Pokémon can't attack",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=AttackRuleMetadata(),
    )


def attack_cost_reduction_rule(
    reduction: int,
    conditions: Optional[list[Condition]] = None,
    per_condition: Optional[str] = None,
) -> CardRule:
    text = f"This Pokémon's attacks cost {reduction} less Energy"
    if per_condition:
        text = f"{text} {per_condition}"
    return CardRule(
        rule_type=CardRuleType.ATTACK_COST_MODIFICATION,
        text=text,
        conditions=_conditions(conditions),
        metadata=AttackRuleMetadata(cost_reduction=reduction, per_condition=per_condition),
    )


def damage_immunity_rule(
    immune_from_subtype: Optional[str] = None,
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    text = "Prevent all damage done to this Pokémon"
    if immune_from_subtype:
        text = f"{text} by attacks from {immune_from_subtype}"
    return CardRule(
        rule_type=CardRuleType.DAMAGE_IMMUNITY,
        text=text,
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=DamageRuleMetadata(immune_from_subtype=immune_from_subtype),
    )


def damage_reduction_rule(amount: int, conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.DAMAGE_REDUCTION_RULE,
        text=f"This Pokémon takes {amount} less damage from attacks",
        conditions=_conditions(conditions),
        metadata=DamageRuleMetadata(reduction_amount=amount),
    )


def status_immunity_rule(
    statuses: list[StatusCondition],
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    status_list = ", ".join(StatusCondition(status).value for status in statuses)
    return CardRule(
        rule_type=CardRuleType.STATUS_IMMUNITY,
        text=f"This Pokémon can't be affected by {status_list}",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=StatusRuleMetadata(immune_status=tuple(statuses)),
    )


def effect_immunity_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.EFFECT_IMMUNITY,
        text="Prevent all effects of attacks, except damage, done to this Pokémon",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=StatusRuleMetadata(),
    )


def extra_prize_cards_rule(count: int, conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.EXTRA_PRIZE_CARDS,
        text=(
            "When this Pokémon is Knocked Out, your opponent takes "
            f"{_plural(count, 'more Prize card')}"
        ),
        conditions=_conditions(conditions),
        metadata=PrizeRuleMetadata(prize_count=count),
    )


def no_prize_cards_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.NO_PRIZE_CARDS,
        text="If this Pokémon is Knocked Out, your opponent doesn't take any Prize cards",
        conditions=_conditions(conditions),
        metadata=PrizeRuleMetadata(prize_count=0),
    )


def can_evolve_turn_one_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.CAN_EVOLVE_TURN_ONE,
        text="This Pokémon can evolve during your first turn or the turn it was played",
        conditions=_conditions(conditions),
        metadata=EvolutionRuleMetadata(allow_first_turn=True),
    )


def cannot_evolve_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.CANNOT_EVOLVE,
        text="This Pokémon can't evolve",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGH,
        metadata=EvolutionRuleMetadata(),
    )


def once_per_game_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.ONCE_PER_GAME,
        text="You can use this only once per game",
        conditions=_conditions(conditions),
        priority=RulePriority.HIGHEST,
        metadata=PlayRuleMetadata(usage_limit="once_per_game"),
    )


def discard_after_use_rule(conditions: Optional[list[Condition]] = None) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.DISCARD_AFTER_USE,
        text="Discard this card after you use it",
        conditions=_conditions(conditions),
        metadata=PlayRuleMetadata(discard_timing="after_use"),
    )


def energy_cost_reduction_rule(
    reduction: int,
    energy_type: Optional[EnergyType] = None,
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    type_text = f" {EnergyType(energy_type).value}" if energy_type else ""
    return CardRule(
        rule_type=CardRuleType.ENERGY_COST_REDUCTION,
        text=f"This Pokémon's attacks cost {reduction} less{type_text} Energy",
        conditions=_conditions(conditions),
        metadata=EnergyRuleMetadata(cost_reduction=reduction, energy_type=energy_type),
    )


def extra_energy_attachment_rule(
    count: int,
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.EXTRA_ENERGY_ATTACHMENT,
        text=(
            f"You may attach {_plural(count, 'extra Energy card')} "
            "to this Pokémon during your turn"
        ),
        conditions=_conditions(conditions),
        metadata=EnergyRuleMetadata(extra_attachments=count),
    )


def energy_type_change_rule(
    change_to_type: EnergyType,
    conditions: Optional[list[Condition]] = None,
) -> CardRule:
    return CardRule(
        rule_type=CardRuleType.ENERGY_TYPE_CHANGE,
        text=f"All Energy attached to this Pokémon are {EnergyType(change_to_type).value} Energy",
        conditions=_conditions(conditions),
        metadata=EnergyRuleMetadata(change_to_type=change_to_type),
    )
