"""
Condition Library - predicates that gate rules and effects.

A Condition names a game-state check ("self has damage", "opponent is
poisoned", "at least 2 Fire energy attached"). Conditions are data only;
an external engine decides whether they hold.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, StrictInt, ValidationInfo, field_validator

from .base import CardValueModel
from .enums import EnergyType, StatusCondition
from .errors import missing_error


class ConditionType(str, Enum):
    """Kinds of game-state predicates."""
    ALWAYS = "ALWAYS"
    COIN_FLIP_SUCCESS = "COIN_FLIP_SUCCESS"
    COIN_FLIP_FAILURE = "COIN_FLIP_FAILURE"

    # Self
    SELF_HAS_DAMAGE = "SELF_HAS_DAMAGE"
    SELF_NO_DAMAGE = "SELF_NO_DAMAGE"
    SELF_HAS_STATUS = "SELF_HAS_STATUS"
    SELF_MINIMUM_DAMAGE = "SELF_MINIMUM_DAMAGE"
    SELF_HAS_ENERGY_TYPE = "SELF_HAS_ENERGY_TYPE"
    SELF_MINIMUM_ENERGY = "SELF_MINIMUM_ENERGY"
    SELF_HAS_BENCHED = "SELF_HAS_BENCHED"

    # Opponent
    OPPONENT_HAS_DAMAGE = "OPPONENT_HAS_DAMAGE"
    OPPONENT_HAS_STATUS = "OPPONENT_HAS_STATUS"
    OPPONENT_CONFUSED = "OPPONENT_CONFUSED"
    OPPONENT_PARALYZED = "OPPONENT_PARALYZED"
    OPPONENT_POISONED = "OPPONENT_POISONED"
    OPPONENT_BURNED = "OPPONENT_BURNED"
    OPPONENT_ASLEEP = "OPPONENT_ASLEEP"
    OPPONENT_HAS_BENCHED = "OPPONENT_HAS_BENCHED"

    # Board
    STADIUM_IN_PLAY = "STADIUM_IN_PLAY"


_STATUS_TYPES = frozenset({ConditionType.SELF_HAS_STATUS, ConditionType.OPPONENT_HAS_STATUS})
_AMOUNT_TYPES = frozenset({
    ConditionType.SELF_MINIMUM_DAMAGE,
    ConditionType.SELF_MINIMUM_ENERGY,
    ConditionType.SELF_HAS_ENERGY_TYPE,
})
_COIN_FLIP_TYPES = frozenset({ConditionType.COIN_FLIP_SUCCESS, ConditionType.COIN_FLIP_FAILURE})


def requires_value(condition_type: ConditionType) -> bool:
    """True if the condition type needs a ConditionValue payload."""
    return (
        condition_type in _STATUS_TYPES
        or condition_type in _AMOUNT_TYPES
    )


class ConditionValue(CardValueModel):
    """Optional parameters of a condition."""
    status_condition: Optional[StatusCondition] = None
    energy_type: Optional[EnergyType] = None
    minimum_amount: Optional[StrictInt] = Field(default=None, ge=1)
    stadium_name: Optional[str] = None


class Condition(CardValueModel):
    """A predicate over game state, evaluated by an external engine."""
    type: ConditionType
    value: Optional[ConditionValue] = Field(default=None, validate_default=True)
    description: Optional[str] = None

    @field_validator("value")
    @classmethod
    def _value_matches_type(
        cls, value: Optional[ConditionValue], info: ValidationInfo
    ) -> Optional[ConditionValue]:
        condition_type = info.data.get("type")
        if condition_type is None or not requires_value(condition_type):
            return value
        if value is None:
            raise missing_error(f"Condition type {condition_type.value} requires a value")
        if condition_type in _STATUS_TYPES and value.status_condition is None:
            raise missing_error("Status condition is required")
        if condition_type in _AMOUNT_TYPES and value.minimum_amount is None:
            raise missing_error("Minimum amount is required")
        if condition_type == ConditionType.SELF_HAS_ENERGY_TYPE and value.energy_type is None:
            raise missing_error("Energy type is required")
        return value

    def is_always(self) -> bool:
        return self.type == ConditionType.ALWAYS

    def is_coin_flip_based(self) -> bool:
        return self.type in _COIN_FLIP_TYPES

    def is_self_condition(self) -> bool:
        return self.type.value.startswith("SELF_")

    def is_opponent_condition(self) -> bool:
        return self.type.value.startswith("OPPONENT_")

    def requires_game_state(self) -> bool:
        """Anything except ALWAYS and coin flips needs the board to evaluate."""
        return not self.is_always() and not self.is_coin_flip_based()


# =============================================================================
# Factory functions
# =============================================================================

def always() -> Condition:
    """Condition with no requirements."""
    return Condition(type=ConditionType.ALWAYS)


def coin_flip_success(description: Optional[str] = None) -> Condition:
    return Condition(type=ConditionType.COIN_FLIP_SUCCESS, description=description)


def coin_flip_failure(description: Optional[str] = None) -> Condition:
    return Condition(type=ConditionType.COIN_FLIP_FAILURE, description=description)


def self_has_damage(description: Optional[str] = None) -> Condition:
    return Condition(type=ConditionType.SELF_HAS_DAMAGE, description=description)


def self_no_damage(description: Optional[str] = None) -> Condition:
    return Condition(type=ConditionType.SELF_NO_DAMAGE, description=description)


def self_minimum_damage(minimum_amount: int, description: Optional[str] = None) -> Condition:
    return Condition(
        type=ConditionType.SELF_MINIMUM_DAMAGE,
        value=ConditionValue(minimum_amount=minimum_amount),
        description=description,
    )


def self_has_status(status: StatusCondition, description: Optional[str] = None) -> Condition:
    return Condition(
        type=ConditionType.SELF_HAS_STATUS,
        value=ConditionValue(status_condition=status),
        description=description,
    )


def opponent_has_status(status: StatusCondition, description: Optional[str] = None) -> Condition:
    return Condition(
        type=ConditionType.OPPONENT_HAS_STATUS,
        value=ConditionValue(status_condition=status),
        description=description,
    )


def self_has_energy_type(
    energy_type: EnergyType,
    minimum_amount: int,
    description: Optional[str] = None,
) -> Condition:
    return Condition(
        type=ConditionType.SELF_HAS_ENERGY_TYPE,
        value=ConditionValue(energy_type=energy_type, minimum_amount=minimum_amount),
        description=description,
    )


def self_minimum_energy(minimum_amount: int, description: Optional[str] = None) -> Condition:
    return Condition(
        type=ConditionType.SELF_MINIMUM_ENERGY,
        value=ConditionValue(minimum_amount=minimum_amount),
        description=description,
    )


def stadium_in_play(stadium_name: Optional[str] = None) -> Condition:
    value = ConditionValue(stadium_name=stadium_name) if stadium_name else None
    return Condition(type=ConditionType.STADIUM_IN_PLAY, value=value)
