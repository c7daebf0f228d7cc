"""Card data schema - effects, rules, value objects and the Card aggregate."""

from .enums import (
    AbilityActivationType,
    CardType,
    Destination,
    Duration,
    EnergySource,
    EnergyType,
    EvolutionStage,
    GameEventType,
    PokemonType,
    PreconditionType,
    Rarity,
    Selector,
    StatusCondition,
    TargetType,
    TrainerType,
    UsageLimit,
)
from .errors import (
    CardDataError,
    CardRuleValidationError,
    InvalidEnumValueError,
    InvalidFormatError,
    InvariantViolationError,
    MissingFieldError,
)
from .damage import DamageExpression, expected_damage, format_damage, parse_damage
from .condition import Condition, ConditionType, ConditionValue
from .attack_effects import AttackEffect, AttackEffectType, parse_attack_effect
from .ability_effects import AbilityEffect, AbilityEffectType, parse_ability_effect
from .trainer_effects import TrainerEffect, TrainerEffectType, parse_trainer_effect
from .card_rules import (
    CardRule,
    CardRuleType,
    RuleCategory,
    RulePriority,
    sort_by_priority,
)
from .rule_validation import RuleValidationResult, check_card_rules, validate_card_rules
from .values import (
    Ability,
    Attack,
    AttackPrecondition,
    EnergyProvision,
    Evolution,
    Resistance,
    Weakness,
)
from .card import Card, CardBuilder

__all__ = [
    "AbilityActivationType",
    "CardType",
    "Destination",
    "Duration",
    "EnergySource",
    "EnergyType",
    "EvolutionStage",
    "GameEventType",
    "PokemonType",
    "PreconditionType",
    "Rarity",
    "Selector",
    "StatusCondition",
    "TargetType",
    "TrainerType",
    "UsageLimit",
    "CardDataError",
    "CardRuleValidationError",
    "InvalidEnumValueError",
    "InvalidFormatError",
    "InvariantViolationError",
    "MissingFieldError",
    "DamageExpression",
    "expected_damage",
    "format_damage",
    "parse_damage",
    "Condition",
    "ConditionType",
    "ConditionValue",
    "AttackEffect",
    "AttackEffectType",
    "parse_attack_effect",
    "AbilityEffect",
    "AbilityEffectType",
    "parse_ability_effect",
    "TrainerEffect",
    "TrainerEffectType",
    "parse_trainer_effect",
    "CardRule",
    "CardRuleType",
    "RuleCategory",
    "RulePriority",
    "sort_by_priority",
    "RuleValidationResult",
    "check_card_rules",
    "validate_card_rules",
    "Ability",
    "Attack",
    "AttackPrecondition",
    "EnergyProvision",
    "Evolution",
    "Resistance",
    "Weakness",
    "Card",
    "CardBuilder",
]
