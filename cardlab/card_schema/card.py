"""
Card aggregate.

A Card is an immutable record. It is assembled by a CardBuilder during
import or editing; the builder's steps are type-gated, so a Pokemon-only
attribute can never end up on a Trainer or Energy card:

    card = (
        CardBuilder.pokemon("uuid", "base-set-v1-pikachu--58", "025", "Pikachu", "Base Set", "58")
        .set_stage(EvolutionStage.BASIC)
        .set_hp(40)
        .add_attack(Attack(name="Gnaw", energy_cost=[EnergyType.COLORLESS], damage="10"))
        .build()
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, TypeVar

from .base import CardValueModel
from .card_rules import CardRule, CardRuleType, sort_by_priority
from .enums import (
    CardType,
    EnergyType,
    EvolutionStage,
    PokemonType,
    Rarity,
    TrainerType,
)
from .errors import InvalidEnumValueError, InvariantViolationError, MissingFieldError
from .rule_validation import validate_card_rules
from .trainer_effects import TrainerEffect, parse_trainer_effect
from .values import Ability, Attack, EnergyProvision, Evolution, Resistance, Weakness

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=CardValueModel)

# Attributes that only one card type may carry
_TYPE_ONLY_FIELDS: dict[CardType, tuple[str, ...]] = {
    CardType.POKEMON: (
        "pokemon_type",
        "stage",
        "level",
        "evolves_from",
        "evolves_to",
        "hp",
        "retreat_cost",
        "weakness",
        "resistance",
        "attacks",
        "ability",
    ),
    CardType.TRAINER: ("trainer_type", "trainer_effects"),
    CardType.ENERGY: ("energy_type", "energy_provision"),
}


@dataclass(frozen=True)
class Card:
    """One printed card variant (Pokemon, Trainer or Energy)."""
    # Identity & cataloging
    instance_id: str
    card_id: str
    name: str
    set_name: str
    card_number: str
    card_type: CardType
    pokemon_number: Optional[str] = None
    rarity: Optional[Rarity] = None
    description: str = ""
    artist: str = ""
    image_url: str = ""
    regulation_mark: Optional[str] = None

    # Pokemon classification
    pokemon_type: Optional[PokemonType] = None
    stage: Optional[EvolutionStage] = None
    level: Optional[int] = None
    subtypes: tuple[str, ...] = ()
    evolves_from: Optional[Evolution] = None
    evolves_to: tuple[Evolution, ...] = ()

    # Battle stats
    hp: Optional[int] = None
    retreat_cost: Optional[int] = None
    weakness: Optional[Weakness] = None
    resistance: Optional[Resistance] = None
    attacks: tuple[Attack, ...] = ()
    ability: Optional[Ability] = None

    # Rules
    rules_text: Optional[str] = None
    card_rules: tuple[CardRule, ...] = ()

    # Trainer / Energy
    trainer_type: Optional[TrainerType] = None
    trainer_effects: tuple[TrainerEffect, ...] = ()
    energy_type: Optional[EnergyType] = None
    energy_provision: Optional[EnergyProvision] = None

    # Editor metadata
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    is_editor_created: bool = False

    def __post_init__(self):
        _require_text(self.instance_id, "instance_id", "Instance ID is required")
        _require_text(self.card_id, "card_id", "Card ID is required")
        _require_text(self.name, "name", "Card name is required")
        _require_text(self.set_name, "set_name", "Set name is required")
        _require_text(self.card_number, "card_number", "Card number is required")
        if self.card_type == CardType.POKEMON:
            _require_text(
                self.pokemon_number, "pokemon_number", "Pokemon number is required for Pokemon cards"
            )
        for card_type, field_names in _TYPE_ONLY_FIELDS.items():
            if card_type == self.card_type:
                continue
            for field_name in field_names:
                if getattr(self, field_name) not in (None, ()):
                    raise InvariantViolationError(
                        f"{field_name} can only be set on {card_type.value.capitalize()} cards",
                        field=field_name,
                    )

    # ---- Type queries ----

    def is_pokemon_card(self) -> bool:
        return self.card_type == CardType.POKEMON

    def is_trainer_card(self) -> bool:
        return self.card_type == CardType.TRAINER

    def is_energy_card(self) -> bool:
        return self.card_type == CardType.ENERGY

    def is_basic_pokemon(self) -> bool:
        return self.is_pokemon_card() and self.stage == EvolutionStage.BASIC

    def is_evolution_pokemon(self) -> bool:
        return (
            self.is_pokemon_card()
            and self.stage is not None
            and self.stage != EvolutionStage.BASIC
        )

    def is_special_energy(self) -> bool:
        return (
            self.is_energy_card()
            and self.energy_provision is not None
            and self.energy_provision.is_special
        )

    # ---- Battle queries ----

    def can_retreat(self) -> bool:
        """False for non-Pokemon cards and for cards with a CANNOT_RETREAT rule."""
        if not self.is_pokemon_card():
            return False
        return not self.has_rule_type(CardRuleType.CANNOT_RETREAT)

    def has_ability(self) -> bool:
        return self.ability is not None

    @property
    def attack_count(self) -> int:
        return len(self.attacks)

    def has_weakness(self) -> bool:
        return self.weakness is not None

    def has_resistance(self) -> bool:
        return self.resistance is not None

    # ---- Card rules ----

    def has_rules(self) -> bool:
        return bool(self.card_rules)

    def get_rules_by_type(self, rule_type: CardRuleType) -> list[CardRule]:
        return [rule for rule in self.card_rules if rule.rule_type == rule_type]

    def get_rules_by_priority(self) -> list[CardRule]:
        """Rules from highest to lowest priority; ties keep their original order."""
        return sort_by_priority(self.card_rules)

    def has_rule_type(self, rule_type: CardRuleType) -> bool:
        return any(rule.rule_type == rule_type for rule in self.card_rules)


def _require_text(value: Optional[str], field_name: str, message: str) -> None:
    if not value or not str(value).strip():
        raise MissingFieldError(message, field=field_name)


def _coerce(model: type[V], value: V | Mapping[str, Any], field_name: str) -> V:
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        return model.from_data(value)
    raise InvariantViolationError(
        f"{field_name} must be a {model.__name__}, got {type(value).__name__}", field=field_name
    )


def _coerce_enum(enum_type, value, field_name: str):
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidEnumValueError(
            f"Invalid {field_name}: {value!r}", field=field_name
        ) from None


class CardBuilder:
    """
    Mutable staging area for a Card.

    Every step returns the builder. Steps that only make sense for one card
    type raise InvariantViolationError on the others.
    """

    def __init__(
        self,
        instance_id: str,
        card_id: str,
        name: str,
        set_name: str,
        card_number: str,
        card_type: CardType,
        pokemon_number: Optional[str] = None,
        rarity: Optional[Rarity] = None,
        description: str = "",
        artist: str = "",
        image_url: str = "",
    ):
        card_type = _coerce_enum(CardType, card_type, "card_type")
        self._card = Card(
            instance_id=instance_id,
            card_id=card_id,
            name=name,
            set_name=set_name,
            card_number=card_number,
            card_type=card_type,
            pokemon_number=pokemon_number,
            rarity=_coerce_enum(Rarity, rarity, "rarity") if rarity is not None else None,
            description=description or "",
            artist=artist or "",
            image_url=image_url or "",
        )
        self._subtypes: list[str] = []
        self._evolves_to: list[Evolution] = []
        self._attacks: list[Attack] = []
        self._trainer_effects: list[TrainerEffect] = []

    # ---- Factories ----

    @classmethod
    def pokemon(
        cls,
        instance_id: str,
        card_id: str,
        pokemon_number: str,
        name: str,
        set_name: str,
        card_number: str,
        rarity: Optional[Rarity] = None,
        description: str = "",
        artist: str = "",
        image_url: str = "",
    ) -> "CardBuilder":
        return cls(
            instance_id, card_id, name, set_name, card_number, CardType.POKEMON,
            pokemon_number=pokemon_number, rarity=rarity,
            description=description, artist=artist, image_url=image_url,
        )

    @classmethod
    def trainer(
        cls,
        instance_id: str,
        card_id: str,
        name: str,
        set_name: str,
        card_number: str,
        rarity: Optional[Rarity] = None,
        description: str = "",
        artist: str = "",
        image_url: str = "",
    ) -> "CardBuilder":
        return cls(
            instance_id, card_id, name, set_name, card_number, CardType.TRAINER,
            rarity=rarity, description=description, artist=artist, image_url=image_url,
        )

    @classmethod
    def energy(
        cls,
        instance_id: str,
        card_id: str,
        name: str,
        set_name: str,
        card_number: str,
        rarity: Optional[Rarity] = None,
        description: str = "",
        artist: str = "",
        image_url: str = "",
    ) -> "CardBuilder":
        return cls(
            instance_id, card_id, name, set_name, card_number, CardType.ENERGY,
            rarity=rarity, description=description, artist=artist, image_url=image_url,
        )

    @classmethod
    def from_editor(
        cls,
        instance_id: str,
        card_id: str,
        pokemon_number: str,
        name: str,
        set_name: str,
        card_number: str,
        created_by: str,
        created_at: Optional[datetime] = None,
        rarity: Optional[Rarity] = None,
        description: str = "",
        artist: str = "",
        image_url: str = "",
    ) -> "CardBuilder":
        """Pokemon card created in the card editor, stamped with its author."""
        builder = cls.pokemon(
            instance_id, card_id, pokemon_number, name, set_name, card_number,
            rarity=rarity, description=description, artist=artist, image_url=image_url,
        )
        return builder.set_editor_metadata(created_by, created_at)

    # ---- Internals ----

    @property
    def card_type(self) -> CardType:
        return self._card.card_type

    def _update(self, **changes) -> "CardBuilder":
        self._card = replace(self._card, **changes)
        return self

    def _require_type(self, card_type: CardType, what: str, field_name: str) -> None:
        if self._card.card_type != card_type:
            label = card_type.value.capitalize()
            raise InvariantViolationError(
                f"{what} can only be set on {label} cards", field=field_name
            )

    # ---- Pokemon steps ----

    def set_pokemon_type(self, pokemon_type: PokemonType) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Pokemon type", "pokemon_type")
        return self._update(pokemon_type=_coerce_enum(PokemonType, pokemon_type, "pokemon_type"))

    def set_stage(self, stage: EvolutionStage) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Evolution stage", "stage")
        return self._update(stage=_coerce_enum(EvolutionStage, stage, "stage"))

    def set_level(self, level: int) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Level", "level")
        if isinstance(level, bool) or not isinstance(level, int) or level < 1:
            raise InvariantViolationError("Level must be a positive integer", field="level")
        return self._update(level=level)

    def add_subtype(self, subtype: str) -> "CardBuilder":
        if not isinstance(subtype, str) or not subtype.strip():
            raise InvariantViolationError("Subtype cannot be empty", field="subtypes")
        if subtype not in self._subtypes:
            self._subtypes.append(subtype)
        return self

    def remove_subtype(self, subtype: str) -> "CardBuilder":
        self._subtypes = [existing for existing in self._subtypes if existing != subtype]
        return self

    def set_evolves_from(self, evolution: Evolution | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Evolution", "evolves_from")
        if self._card.stage == EvolutionStage.BASIC:
            raise InvariantViolationError(
                "Basic Pokemon cannot have evolves_from", field="evolves_from"
            )
        return self._update(evolves_from=_coerce(Evolution, evolution, "evolves_from"))

    def add_evolves_to(self, evolution: Evolution | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Evolution", "evolves_to")
        evolution = _coerce(Evolution, evolution, "evolves_to")
        if evolution not in self._evolves_to:
            self._evolves_to.append(evolution)
        return self

    def set_hp(self, hp: int) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "HP", "hp")
        if isinstance(hp, bool) or not isinstance(hp, int) or hp <= 0:
            raise InvariantViolationError("HP must be greater than 0", field="hp")
        return self._update(hp=hp)

    def set_retreat_cost(self, cost: int) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Retreat cost", "retreat_cost")
        if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
            raise InvariantViolationError("Retreat cost cannot be negative", field="retreat_cost")
        return self._update(retreat_cost=cost)

    def set_weakness(self, weakness: Weakness | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Weakness", "weakness")
        return self._update(weakness=_coerce(Weakness, weakness, "weakness"))

    def set_resistance(self, resistance: Resistance | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Resistance", "resistance")
        return self._update(resistance=_coerce(Resistance, resistance, "resistance"))

    def add_attack(self, attack: Attack | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Attacks", "attacks")
        self._attacks.append(_coerce(Attack, attack, "attacks"))
        return self

    def remove_attack(self, attack_name: str) -> "CardBuilder":
        self._attacks = [attack for attack in self._attacks if attack.name != attack_name]
        return self

    def set_ability(self, ability: Ability | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.POKEMON, "Ability", "ability")
        return self._update(ability=_coerce(Ability, ability, "ability"))

    # ---- Rules (any card type) ----

    def set_rules_text(self, text: str) -> "CardBuilder":
        return self._update(rules_text=text)

    def set_card_rules(self, rules: Iterable[CardRule | Mapping[str, Any]]) -> "CardBuilder":
        """
        Install a rule list atomically.

        Raises CardRuleValidationError listing every invalid rule; on failure
        the previously installed rules are kept.
        """
        return self._update(card_rules=validate_card_rules(rules))

    # ---- Trainer steps ----

    def set_trainer_type(self, trainer_type: TrainerType) -> "CardBuilder":
        self._require_type(CardType.TRAINER, "Trainer type", "trainer_type")
        return self._update(trainer_type=_coerce_enum(TrainerType, trainer_type, "trainer_type"))

    def add_trainer_effect(self, effect: TrainerEffect | Mapping[str, Any]) -> "CardBuilder":
        self._require_type(CardType.TRAINER, "Trainer effects", "trainer_effects")
        self._trainer_effects.append(parse_trainer_effect(effect))
        return self

    def set_trainer_effects(
        self, effects: Iterable[TrainerEffect | Mapping[str, Any]]
    ) -> "CardBuilder":
        self._require_type(CardType.TRAINER, "Trainer effects", "trainer_effects")
        self._trainer_effects = [parse_trainer_effect(effect) for effect in effects]
        return self

    # ---- Energy steps ----

    def set_energy_type(self, energy_type: EnergyType) -> "CardBuilder":
        self._require_type(CardType.ENERGY, "Energy type", "energy_type")
        return self._update(energy_type=_coerce_enum(EnergyType, energy_type, "energy_type"))

    def set_energy_provision(
        self, provision: EnergyProvision | Mapping[str, Any]
    ) -> "CardBuilder":
        self._require_type(CardType.ENERGY, "Energy provision", "energy_provision")
        return self._update(
            energy_provision=_coerce(EnergyProvision, provision, "energy_provision")
        )

    # ---- Catalog metadata ----

    def set_regulation_mark(self, mark: str) -> "CardBuilder":
        return self._update(regulation_mark=mark)

    def set_editor_metadata(
        self, created_by: str, created_at: Optional[datetime] = None
    ) -> "CardBuilder":
        _require_text(created_by, "created_by", "Editor-created cards need created_by")
        return self._update(
            created_by=created_by,
            created_at=created_at or datetime.now(timezone.utc),
            is_editor_created=True,
        )

    # ---- Build ----

    def build(self) -> Card:
        """Freeze the staged values into a Card."""
        if self._card.evolves_from is not None and self._card.stage == EvolutionStage.BASIC:
            raise InvariantViolationError(
                "Basic Pokemon cannot have evolves_from", field="evolves_from"
            )
        card = replace(
            self._card,
            subtypes=tuple(self._subtypes),
            evolves_to=tuple(self._evolves_to),
            attacks=tuple(self._attacks),
            trainer_effects=tuple(self._trainer_effects),
        )
        logger.debug("Built %s card %s (%s)", card.card_type.value, card.card_id, card.name)
        return card
