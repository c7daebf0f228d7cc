"""
Card file importer.

Reads card set files of the form

    {
      "metadata": {"author": "...", "setName": "...", "version": "1", ...},
      "cards": [{"name": "...", "cardNumber": "...", ...}, ...]
    }

and builds a Card for each entry through CardBuilder. A card that fails
validation is logged and skipped; the rest of the batch still loads. Only a
malformed file envelope fails the whole file.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from pydantic import ConfigDict, Field

from .card_schema.base import CardValueModel
from .card_schema.card import Card, CardBuilder
from .card_schema.enums import CardType, Rarity
from .card_schema.errors import CardDataError, InvalidFormatError, MissingFieldError

logger = logging.getLogger(__name__)


class CardFileMetadata(CardValueModel):
    """The `metadata` block of a card file. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    author: str = Field(min_length=1)
    set_name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    official: bool = False
    date_released: Optional[str] = None
    description: Optional[str] = None
    series: Optional[str] = None
    language: Optional[str] = None


@dataclass
class ImportResult:
    """Cards loaded from one or more files, with per-card errors and warnings."""
    cards: list[Card] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def extend(self, other: "ImportResult") -> None:
        self.cards.extend(other.cards)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


_KNOWN_KEYS = frozenset({
    "name", "cardNumber", "cardType", "pokemonNumber", "rarity", "description",
    "artist", "imageUrl", "regulationMark", "pokemonType", "stage", "level",
    "subtypes", "evolvesFrom", "evolvesTo", "hp", "retreatCost", "weakness",
    "resistance", "attacks", "ability", "rulesText", "cardRules", "trainerType",
    "trainerEffects", "energyType", "energyProvision",
})


def to_kebab_case(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def generate_card_id(metadata: CardFileMetadata, data: Mapping[str, Any]) -> str:
    """`{author}-{set}-v{version}-{name}-{level}-{cardNumber}`; level may be empty."""
    level = data.get("level")
    return "-".join([
        to_kebab_case(metadata.author),
        to_kebab_case(metadata.set_name),
        f"v{metadata.version}",
        to_kebab_case(str(data.get("name", ""))),
        "" if level is None else str(level),
        str(data.get("cardNumber", "")),
    ])


def _list_field(data: Mapping[str, Any], key: str) -> list:
    """The list under `key`, empty when absent."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidFormatError(
            f"{key} must be a list, got {type(value).__name__}", field=key
        )
    return value


def card_from_dict(
    data: Mapping[str, Any],
    metadata: CardFileMetadata,
    warnings: Optional[list[str]] = None,
) -> Card:
    """
    Build one card from its JSON shape.

    Raises CardDataError (or a subclass) when the data is invalid. Non-fatal
    oddities are appended to `warnings` when a list is given.
    """
    if not isinstance(data, Mapping):
        raise InvalidFormatError(f"Card entry must be an object, got {type(data).__name__}")
    if warnings is None:
        warnings = []

    name = data.get("name")
    if not name:
        raise MissingFieldError("Card name is required", field="name")
    if not data.get("cardNumber"):
        raise MissingFieldError("Card number is required", field="card_number")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        warnings.append(f"{name}: ignoring unknown fields {', '.join(unknown)}")

    card_type = data.get("cardType") or CardType.POKEMON
    common = dict(
        instance_id=str(uuid.uuid4()),
        card_id=generate_card_id(metadata, data),
        name=name,
        set_name=metadata.set_name,
        card_number=str(data["cardNumber"]),
        rarity=data.get("rarity") or Rarity.COMMON,
        description=data.get("description") or "",
        artist=data.get("artist") or "",
        image_url=data.get("imageUrl") or "",
    )
    builder = CardBuilder(
        card_type=card_type,
        pokemon_number=data.get("pokemonNumber"),
        **common,
    )

    if builder.card_type == CardType.POKEMON:
        _apply_pokemon_fields(builder, data, warnings)
    elif builder.card_type == CardType.TRAINER:
        if data.get("trainerType"):
            builder.set_trainer_type(data["trainerType"])
        builder.set_trainer_effects(_list_field(data, "trainerEffects"))
    else:
        if data.get("energyType"):
            builder.set_energy_type(data["energyType"])
        if data.get("energyProvision"):
            builder.set_energy_provision(data["energyProvision"])

    if data.get("rulesText"):
        builder.set_rules_text(data["rulesText"])
    if data.get("cardRules"):
        builder.set_card_rules(data["cardRules"])
    if data.get("regulationMark"):
        builder.set_regulation_mark(data["regulationMark"])

    return builder.build()


def _apply_pokemon_fields(
    builder: CardBuilder, data: Mapping[str, Any], warnings: list[str]
) -> None:
    if data.get("pokemonType"):
        builder.set_pokemon_type(data["pokemonType"])
    if data.get("stage"):
        builder.set_stage(data["stage"])
    if data.get("level") is not None:
        builder.set_level(data["level"])
    for subtype in _list_field(data, "subtypes"):
        builder.add_subtype(subtype)
    if data.get("hp") is not None:
        builder.set_hp(data["hp"])
    if data.get("retreatCost") is not None:
        builder.set_retreat_cost(data["retreatCost"])

    evolves_from = data.get("evolvesFrom")
    if isinstance(evolves_from, Mapping):
        builder.set_evolves_from(evolves_from)
    elif evolves_from:
        # A bare name carries no Pokedex number to link against
        warnings.append(f"{data['name']}: evolvesFrom {evolves_from!r} is a name, not a link")
    for evolution in _list_field(data, "evolvesTo"):
        builder.add_evolves_to(evolution)

    if data.get("weakness"):
        builder.set_weakness(data["weakness"])
    if data.get("resistance"):
        builder.set_resistance(data["resistance"])
    if data.get("ability"):
        builder.set_ability(data["ability"])
    for attack in _list_field(data, "attacks"):
        builder.add_attack(attack)


def load_card_data(raw: Any, source: str = "<data>") -> ImportResult:
    """Import an already-parsed card file."""
    result = ImportResult()

    if not isinstance(raw, Mapping) or not isinstance(raw.get("cards"), list):
        result.errors.append(f"{source}: expected an object with a 'cards' list")
        return result
    try:
        metadata = CardFileMetadata.from_data(raw.get("metadata") or {})
    except CardDataError as exc:
        result.errors.append(f"{source}: invalid metadata: {exc}")
        return result

    for index, entry in enumerate(raw["cards"]):
        label = entry.get("name", "unnamed") if isinstance(entry, Mapping) else "unnamed"
        try:
            result.cards.append(card_from_dict(entry, metadata, result.warnings))
        except CardDataError as exc:
            message = f"{source}: card #{index} ({label}): {exc}"
            logger.warning("Skipping card: %s", message)
            result.errors.append(message)

    logger.info(
        "Loaded %d card(s) from %s (%d skipped)", len(result.cards), source, len(result.errors)
    )
    return result


def load_card_file(path: str | Path) -> ImportResult:
    """Import one card file. I/O and JSON errors are reported, not raised."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return ImportResult(errors=[f"{path}: file not found"])
    except json.JSONDecodeError as exc:
        return ImportResult(errors=[f"{path}: invalid JSON: {exc}"])
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("Cannot read card file %s: %s", path, exc)
        return ImportResult(errors=[f"{path}: cannot read file: {exc}"])
    return load_card_data(raw, source=str(path))


def load_card_files(paths: Iterable[str | Path]) -> ImportResult:
    """Import several card files into one result."""
    combined = ImportResult()
    for path in paths:
        combined.extend(load_card_file(path))
    return combined
