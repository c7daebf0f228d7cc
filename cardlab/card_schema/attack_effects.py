"""
Attack effects - closed set of structured effects an attack can have.

An attack effect is data for an external rules engine; nothing here
executes it. `AttackEffect` is a discriminated union over `effect_type`,
so each kind carries exactly its own payload:

    DISCARD_ENERGY       target self|defending, amount n|"all", energy_type?
    STATUS_CONDITION     target defending, status_condition
    DAMAGE_MODIFIER      modifier != 0
    HEAL                 target self|defending, amount
    PREVENT_DAMAGE       target self|defending, duration next_turn|this_turn, amount?
    RECOIL_DAMAGE        target self, amount
    ENERGY_ACCELERATION  target self|benched_yours, source, count, energy_type?, selector?
    SWITCH_POKEMON       target self, with benched_yours, selector
    MOVE_DAMAGE_COUNTER  source_target != destination_target, amount, prevent_knockout
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
from .enums import EnergyType, TargetType


class AttackEffectType(str, Enum):
    """Kinds of attack effects."""
    DISCARD_ENERGY = "DISCARD_ENERGY"
    STATUS_CONDITION = "STATUS_CONDITION"
    DAMAGE_MODIFIER = "DAMAGE_MODIFIER"
    HEAL = "HEAL"
    PREVENT_DAMAGE = "PREVENT_DAMAGE"
    RECOIL_DAMAGE = "RECOIL_DAMAGE"
    ENERGY_ACCELERATION = "ENERGY_ACCELERATION"
    SWITCH_POKEMON = "SWITCH_POKEMON"
    MOVE_DAMAGE_COUNTER = "MOVE_DAMAGE_COUNTER"


class DiscardEnergyEffect(TargetedEffect):
    """Discard energy from this Pokemon or the defending Pokemon."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset(
        {TargetType.SELF, TargetType.DEFENDING}
    )

    effect_type: Literal["DISCARD_ENERGY"] = "DISCARD_ENERGY"
    amount: AmountOrAll
    energy_type: Optional[EnergyType] = None


class DamageModifierEffect(EffectModel):
    """Adjust this attack's damage up or down."""
    effect_type: Literal["DAMAGE_MODIFIER"] = "DAMAGE_MODIFIER"
    modifier: StrictInt

    @field_validator("modifier")
    @classmethod
    def _modifier_nonzero(cls, value: int) -> int:
        return nonzero_modifier(value)


class RecoilDamageEffect(TargetedEffect):
    """This Pokemon damages itself."""
    allowed_targets: ClassVar[frozenset[TargetType]] = frozenset({TargetType.SELF})

    effect_type: Literal["RECOIL_DAMAGE"] = "RECOIL_DAMAGE"
    target: TargetType = TargetType.SELF
    amount: PositiveInt


AttackEffect = Annotated[
    Union[
        DiscardEnergyEffect,
        StatusConditionEffect,
        DamageModifierEffect,
        HealEffect,
        PreventDamageEffect,
        RecoilDamageEffect,
        EnergyAccelerationEffect,
        SwitchPokemonEffect,
        MoveDamageCounterEffect,
    ],
    Field(discriminator="effect_type"),
]

_ATTACK_EFFECT_ADAPTER: TypeAdapter[AttackEffect] = TypeAdapter(AttackEffect)


def parse_attack_effect(data: Any) -> AttackEffect:
    """Build an attack effect from JSON-shaped data."""
    return validate_with(_ATTACK_EFFECT_ADAPTER, data, "AttackEffect")


def attack_effect_type(effect: AttackEffect) -> AttackEffectType:
    """The effect's kind as an enum member."""
    return AttackEffectType(effect.effect_type)
