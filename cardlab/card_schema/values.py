"""
Card value objects - immutable parts of a card.

- Weakness / Resistance: type plus a modifier in the printed mini-language
- Evolution: link to another Pokemon by number and stage
- EnergyProvision: what an Energy card provides
- AttackPrecondition: checks made before an attack resolves
- Attack: cost, parsed damage, text and structured effects
- Ability: activation rules plus structured effects
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    Field,
    StrictInt,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from .ability_effects import AbilityEffect, AbilityEffectType
from .attack_effects import AttackEffect, AttackEffectType
from .base import CardValueModel
from .damage import DamageExpression, NoDamage, coerce_damage, format_damage
from .enums import (
    AbilityActivationType,
    EnergyType,
    EvolutionStage,
    GameEventType,
    PokemonType,
    PreconditionType,
    UsageLimit,
)
from .errors import CardDataError, format_error, invariant_error, missing_error

_WEAKNESS_MODIFIER = re.compile(r"^([×+])(\d+)$")


# =============================================================================
# Weakness / Resistance / Evolution
# =============================================================================

class Weakness(CardValueModel):
    """Damage taken from a type is multiplied ("×2") or increased ("+20")."""
    type: PokemonType
    modifier: str = Field(pattern=r"^[×+]\d+$")

    @property
    def operator(self) -> str:
        return _WEAKNESS_MODIFIER.match(self.modifier).group(1)

    @property
    def amount(self) -> int:
        return int(_WEAKNESS_MODIFIER.match(self.modifier).group(2))

    @property
    def is_multiplier(self) -> bool:
        return self.operator == "×"


class Resistance(CardValueModel):
    """Damage taken from a type is reduced ("-30")."""
    type: PokemonType
    modifier: str = Field(pattern=r"^-\d+$")

    @property
    def reduction(self) -> int:
        return abs(int(self.modifier))


class Evolution(CardValueModel):
    """A link to the Pokemon this card evolves from or into."""
    pokemon_number: str = Field(min_length=1)
    stage: EvolutionStage
    condition: Optional[str] = None


# =============================================================================
# Energy provision
# =============================================================================

class EnergyProvision(CardValueModel):
    """
    What an Energy card provides.

    Anything beyond one energy of plain type (several energy, play
    restrictions, extra effects) makes it a special energy and must be
    flagged as such.
    """
    energy_types: tuple[EnergyType, ...] = Field(min_length=1)
    amount: StrictInt = Field(default=1, ge=1)
    is_special: bool = False
    restrictions: Optional[tuple[str, ...]] = None
    additional_effects: Optional[str] = None

    @model_validator(mode="after")
    def _special_when_needed(self) -> "EnergyProvision":
        if (
            self.amount > 1 or self.has_restrictions() or self.has_additional_effects()
        ) and not self.is_special:
            raise invariant_error(
                "Energy cards with multiple energy, restrictions, or effects must be marked as special"
            )
        return self

    def is_basic_energy(self) -> bool:
        return (
            not self.is_special
            and self.amount == 1
            and len(self.energy_types) == 1
            and not self.has_restrictions()
            and not self.has_additional_effects()
        )

    @property
    def primary_type(self) -> EnergyType:
        return self.energy_types[0]

    def provides_type(self, energy_type: EnergyType) -> bool:
        return energy_type in self.energy_types

    def provides_colorless(self) -> bool:
        return self.provides_type(EnergyType.COLORLESS)

    def has_restrictions(self) -> bool:
        return bool(self.restrictions)

    def has_additional_effects(self) -> bool:
        return bool(self.additional_effects and self.additional_effects.strip())

    def describe(self) -> str:
        types = " or ".join(energy_type.value for energy_type in self.energy_types)
        amount = f"{self.amount} {types}" if self.amount > 1 else types
        description = f"Provides {amount} Energy"
        if self.restrictions:
            description += ". Restrictions: " + ", ".join(self.restrictions)
        if self.additional_effects:
            description += f". {self.additional_effects}"
        return description


# =============================================================================
# Attack preconditions
# =============================================================================

class CoinFlipValue(CardValueModel):
    number_of_coins: StrictInt = Field(ge=1, le=10)


class DamageCheckValue(CardValueModel):
    condition: Literal["has_damage", "no_damage", "minimum_damage"]
    minimum_damage: Optional[StrictInt] = Field(default=None, ge=1, validate_default=True)

    @field_validator("minimum_damage")
    @classmethod
    def _minimum_when_needed(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        if info.data.get("condition") == "minimum_damage" and value is None:
            raise missing_error("Minimum damage is required for minimum_damage condition")
        return value


class EnergyCheckValue(CardValueModel):
    energy_type: EnergyType
    minimum: StrictInt = Field(ge=1)


class CoinFlipPrecondition(CardValueModel):
    type: Literal["COIN_FLIP"] = "COIN_FLIP"
    value: CoinFlipValue
    description: str = Field(min_length=1)


class DamageCheckPrecondition(CardValueModel):
    type: Literal["DAMAGE_CHECK"] = "DAMAGE_CHECK"
    value: DamageCheckValue
    description: str = Field(min_length=1)


class EnergyCheckPrecondition(CardValueModel):
    type: Literal["ENERGY_CHECK"] = "ENERGY_CHECK"
    value: EnergyCheckValue
    description: str = Field(min_length=1)


AttackPrecondition = Annotated[
    Union[CoinFlipPrecondition, DamageCheckPrecondition, EnergyCheckPrecondition],
    Field(discriminator="type"),
]


# =============================================================================
# Attack
# =============================================================================

class Attack(CardValueModel):
    """
    A Pokemon's attack.

    `damage` accepts the printed string ("30", "20×", "40+", "30+20") and
    stores it parsed; dumping renders it back to the printed form.
    """
    name: str = Field(min_length=1)
    energy_cost: tuple[EnergyType, ...] = ()
    energy_bonus_cap: Optional[StrictInt] = Field(default=None, ge=0)
    damage: DamageExpression = Field(default_factory=NoDamage)
    text: str = ""
    preconditions: Optional[tuple[AttackPrecondition, ...]] = None
    effects: Optional[tuple[AttackEffect, ...]] = None

    @field_validator("damage", mode="before")
    @classmethod
    def _parse_damage(cls, value: Any, info: ValidationInfo) -> Any:
        cap = info.data.get("energy_bonus_cap") or 0
        try:
            return coerce_damage(value, cap)
        except CardDataError as exc:
            raise format_error(str(exc)) from exc

    @field_serializer("damage")
    def _render_damage(self, value: DamageExpression) -> str:
        return format_damage(value)

    @property
    def total_energy_cost(self) -> int:
        return len(self.energy_cost)

    @property
    def damage_text(self) -> str:
        return format_damage(self.damage)

    def energy_count_by_type(self, energy_type: EnergyType) -> int:
        return sum(1 for cost in self.energy_cost if cost == energy_type)

    def deals_damage(self) -> bool:
        return not isinstance(self.damage, NoDamage)

    def expected_damage(self) -> float:
        return self.damage.expected_value()

    def has_effects(self) -> bool:
        return bool(self.effects)

    def get_effects_by_type(self, effect_type: AttackEffectType) -> list[AttackEffect]:
        return [effect for effect in self.effects or () if effect.effect_type == effect_type.value]

    def has_preconditions(self) -> bool:
        return bool(self.preconditions)

    def get_preconditions_by_type(self, precondition_type: PreconditionType) -> list:
        return [
            precondition
            for precondition in self.preconditions or ()
            if precondition.type == precondition_type.value
        ]


# =============================================================================
# Ability
# =============================================================================

_TRIGGER_DESCRIPTIONS: dict[GameEventType, str] = {
    GameEventType.WHEN_PLAYED: "when played",
    GameEventType.WHEN_DAMAGED: "when damaged",
    GameEventType.WHEN_ATTACKING: "when attacking",
    GameEventType.WHEN_DEFENDING: "when defending",
    GameEventType.BETWEEN_TURNS: "between turns",
    GameEventType.WHEN_KNOCKED_OUT: "when knocked out",
    GameEventType.START_OF_TURN: "at the start of your turn",
    GameEventType.END_OF_TURN: "at the end of your turn",
}


class Ability(CardValueModel):
    """
    A Pokemon's ability.

    - PASSIVE abilities are always on and take no usage limit
    - TRIGGERED abilities name the game event that fires them
    - ACTIVATED abilities are used by the player, optionally once per turn
    """
    name: str = Field(min_length=1)
    text: str = Field(min_length=1)
    activation_type: AbilityActivationType
    effects: tuple[AbilityEffect, ...] = Field(min_length=1)
    trigger_event: Optional[GameEventType] = Field(default=None, validate_default=True)
    usage_limit: Optional[UsageLimit] = Field(default=None, validate_default=True)

    @field_validator("trigger_event")
    @classmethod
    def _trigger_iff_triggered(
        cls, value: Optional[GameEventType], info: ValidationInfo
    ) -> Optional[GameEventType]:
        activation = info.data.get("activation_type")
        if activation == AbilityActivationType.TRIGGERED and value is None:
            raise missing_error("Triggered abilities must specify a trigger event")
        if activation is not None and activation != AbilityActivationType.TRIGGERED and value:
            raise invariant_error("Only TRIGGERED abilities can have a trigger event")
        return value

    @field_validator("usage_limit")
    @classmethod
    def _no_limit_when_passive(
        cls, value: Optional[UsageLimit], info: ValidationInfo
    ) -> Optional[UsageLimit]:
        if info.data.get("activation_type") == AbilityActivationType.PASSIVE and value:
            raise invariant_error("PASSIVE abilities should not have usage limits")
        return value

    def is_passive(self) -> bool:
        return self.activation_type == AbilityActivationType.PASSIVE

    def is_triggered(self) -> bool:
        return self.activation_type == AbilityActivationType.TRIGGERED

    def is_activated(self) -> bool:
        return self.activation_type == AbilityActivationType.ACTIVATED

    def get_effects_by_type(self, effect_type: AbilityEffectType) -> list[AbilityEffect]:
        return [effect for effect in self.effects if effect.effect_type == effect_type.value]

    def activation_description(self) -> str:
        if self.is_passive():
            return "Always active"
        if self.is_triggered():
            return f"Activates {_TRIGGER_DESCRIPTIONS[self.trigger_event]}"
        if self.usage_limit == UsageLimit.ONCE_PER_TURN:
            return "Once per turn - Player activates"
        return "Player activates"
