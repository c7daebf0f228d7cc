"""
Building blocks shared by attack and ability effect variants.

Each effect variant is a frozen model whose `effect_type` literal selects
its payload. Target, duration and energy-source restrictions differ
between attacks and abilities, so they are class-level allow-lists that a
variant overrides instead of separate field types.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Optional, Union

from pydantic import Field, StrictInt, ValidationInfo, field_validator

from .base import CardValueModel
from .condition import Condition
from .enums import Duration, EnergySource, EnergyType, Selector, StatusCondition, TargetType
from .errors import enum_error, invariant_error

# A count or amount that may also be "all" (discard all energy, prevent all damage)
# Payload numbers must be real integers: "30" and True are rejected
PositiveInt = Annotated[StrictInt, Field(ge=1)]
AmountOrAll = Union[PositiveInt, Literal["all"]]


def _allowed(values: frozenset) -> str:
    return ", ".join(sorted(value.value for value in values))


class EffectModel(CardValueModel):
    """Base for every effect variant."""
    required_conditions: Optional[tuple[Condition, ...]] = None

    def has_conditions(self) -> bool:
        return bool(self.required_conditions)


class TargetedEffect(EffectModel):
    """Effect applied to a single target drawn from `allowed_targets`."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset(TargetType)

    target: TargetType

    @field_validator("target")
    @classmethod
    def _target_allowed(cls, value: TargetType) -> TargetType:
        if value not in cls.allowed_targets:
            raise enum_error(
                f"{cls.__name__} target must be one of: {_allowed(cls.allowed_targets)}"
            )
        return value


# =============================================================================
# Variants shared by attacks and abilities
# =============================================================================

class HealEffect(TargetedEffect):
    """Remove damage from a Pokemon."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset(
        {TargetType.SELF, TargetType.DEFENDING}
    )

    effect_type: Literal["HEAL"] = "HEAL"
    amount: PositiveInt


class PreventDamageEffect(TargetedEffect):
    """Prevent all or some damage for a while."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset(
        {TargetType.SELF, TargetType.DEFENDING}
    )
    allowed_durations: ClassVar[frozenset[Duration]] = frozenset(
        {Duration.NEXT_TURN, Duration.THIS_TURN}
    )

    effect_type: Literal["PREVENT_DAMAGE"] = "PREVENT_DAMAGE"
    duration: Duration
    amount: Optional[AmountOrAll] = None

    @field_validator("duration")
    @classmethod
    def _duration_allowed(cls, value: Duration) -> Duration:
        if value not in cls.allowed_durations:
            raise enum_error(
                f"{cls.__name__} duration must be one of: {_allowed(cls.allowed_durations)}"
            )
        return value


class StatusConditionEffect(TargetedEffect):
    """Inflict a special condition."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset({TargetType.DEFENDING})

    target: TargetType = TargetType.DEFENDING
    effect_type: Literal["STATUS_CONDITION"] = "STATUS_CONDITION"
    status_condition: StatusCondition


class EnergyAccelerationEffect(TargetedEffect):
    """Attach extra energy from somewhere."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset(
        {TargetType.SELF, TargetType.BENCHED_YOURS}
    )
    allowed_sources: ClassVar[frozenset[EnergySource]] = frozenset(
        {EnergySource.DECK, EnergySource.DISCARD, EnergySource.HAND}
    )

    effect_type: Literal["ENERGY_ACCELERATION"] = "ENERGY_ACCELERATION"
    source: EnergySource
    count: PositiveInt
    energy_type: Optional[EnergyType] = None
    selector: Optional[Selector] = None

    @field_validator("source")
    @classmethod
    def _source_allowed(cls, value: EnergySource) -> EnergySource:
        if value not in cls.allowed_sources:
            raise enum_error(
                f"{cls.__name__} source must be one of: {_allowed(cls.allowed_sources)}"
            )
        return value


class SwitchPokemonEffect(TargetedEffect):
    """Switch this Pokemon with one of your benched Pokemon."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset({TargetType.SELF})

    target: TargetType = TargetType.SELF
    effect_type: Literal["SWITCH_POKEMON"] = "SWITCH_POKEMON"
    with_target: TargetType = Field(default=TargetType.BENCHED_YOURS, alias="with")
    selector: Selector

    @field_validator("with_target")
    @classmethod
    def _with_benched(cls, value: TargetType) -> TargetType:
        if value != TargetType.BENCHED_YOURS:
            raise enum_error("Switch partner must be benched_yours")
        return value


class MoveDamageCounterEffect(EffectModel):
    """
    Move damage counters between two different Pokemon.

    The only variant with two targets: `source_target` and
    `destination_target` must differ.
    """
    effect_type: Literal["MOVE_DAMAGE_COUNTER"] = "MOVE_DAMAGE_COUNTER"
    source_target: TargetType
    destination_target: TargetType
    amount: PositiveInt
    prevent_knockout: bool = True

    @field_validator("destination_target")
    @classmethod
    def _distinct_targets(cls, value: TargetType, info: ValidationInfo) -> TargetType:
        if info.data.get("source_target") == value:
            raise invariant_error("source_target and destination_target must be different")
        return value


def nonzero_modifier(value: int) -> int:
    """Validator body for damage and HP modifiers."""
    if value == 0:
        raise invariant_error("Modifier must not be 0")
    return value

