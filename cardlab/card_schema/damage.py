"""
Damage mini-language.

Printed damage is a short string parsed once, at load time, into one of:

- NoDamage:           ""  (or "0")
- FlatDamage:         "30"
- CoinFlipDamage:     "20×"   expected value n / 2
- EnergyBonusDamage:  "40+"   expected value (n + (n + 10 * cap)) / 2
- CompoundDamage:     "30+20" expected value a + b

The ASCII "x" is accepted for coin-flip damage; format_damage always
renders the printed "×".
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from .base import CardValueModel, validate_with
from .errors import InvalidFormatError

COIN_FLIP_SIGN = "×"
ENERGY_BONUS_PER_ENERGY = 10

_FLAT = re.compile(r"^(\d+)$")
_COIN_FLIP = re.compile(r"^(\d+)\s*[×xX]$")
_ENERGY_BONUS = re.compile(r"^(\d+)\+$")
_COMPOUND = re.compile(r"^\d+(?:\+\d+)+$")


class NoDamage(CardValueModel):
    """Attack deals no printed damage."""
    kind: Literal["none"] = "none"

    def expected_value(self) -> float:
        return 0.0


class FlatDamage(CardValueModel):
    """Fixed damage."""
    kind: Literal["flat"] = "flat"
    amount: int = Field(ge=0)

    def expected_value(self) -> float:
        return float(self.amount)


class CoinFlipDamage(CardValueModel):
    """Damage dealt on heads only."""
    kind: Literal["coin_flip"] = "coin_flip"
    amount: int = Field(ge=0)

    def expected_value(self) -> float:
        return self.amount / 2


class EnergyBonusDamage(CardValueModel):
    """Base damage plus 10 per extra energy, up to `cap` extra energy."""
    kind: Literal["energy_bonus"] = "energy_bonus"
    base: int = Field(ge=0)
    cap: int = Field(default=0, ge=0)

    @property
    def max_damage(self) -> int:
        return self.base + self.cap * ENERGY_BONUS_PER_ENERGY

    def expected_value(self) -> float:
        # Midpoint of min and max. Without a cap only the base counts.
        if self.cap == 0:
            return float(self.base)
        return (self.base + self.max_damage) / 2


class CompoundDamage(CardValueModel):
    """Sum of several fixed parts, e.g. "30+20"."""
    kind: Literal["compound"] = "compound"
    parts: tuple[int, ...] = Field(min_length=2)

    def expected_value(self) -> float:
        return float(sum(self.parts))


DamageExpression = Annotated[
    Union[NoDamage, FlatDamage, CoinFlipDamage, EnergyBonusDamage, CompoundDamage],
    Field(discriminator="kind"),
]

_DAMAGE_ADAPTER: TypeAdapter[DamageExpression] = TypeAdapter(DamageExpression)


def parse_damage(text: str | None, energy_bonus_cap: int = 0) -> DamageExpression:
    """
    Parse a printed damage string.

    Raises InvalidFormatError for anything outside the grammar.
    """
    if text is None:
        return NoDamage()
    if not isinstance(text, str):
        raise InvalidFormatError(
            f"Damage must be a string, got {type(text).__name__}", field="damage"
        )

    value = text.strip()
    if value in ("", "0"):
        return NoDamage()

    match = _FLAT.match(value)
    if match:
        return FlatDamage(amount=int(match.group(1)))

    match = _COIN_FLIP.match(value)
    if match:
        return CoinFlipDamage(amount=int(match.group(1)))

    match = _ENERGY_BONUS.match(value)
    if match:
        return EnergyBonusDamage(base=int(match.group(1)), cap=energy_bonus_cap)

    if _COMPOUND.match(value):
        return CompoundDamage(parts=tuple(int(part) for part in value.split("+")))

    raise InvalidFormatError(f"Invalid damage expression: {text!r}", field="damage")


def coerce_damage(value: Any, energy_bonus_cap: int = 0) -> DamageExpression:
    """
    Accept a damage string, a parsed expression, or its dumped mapping.

    A non-zero `energy_bonus_cap` overrides the cap of an already parsed
    energy-bonus expression.
    """
    if value is None or isinstance(value, str):
        return parse_damage(value, energy_bonus_cap)
    expression = validate_with(_DAMAGE_ADAPTER, value, "DamageExpression")
    if (
        isinstance(expression, EnergyBonusDamage)
        and energy_bonus_cap
        and expression.cap != energy_bonus_cap
    ):
        return EnergyBonusDamage(base=expression.base, cap=energy_bonus_cap)
    return expression


def format_damage(expression: DamageExpression) -> str:
    """Render a parsed damage expression back to its printed form."""
    if isinstance(expression, NoDamage):
        return ""
    if isinstance(expression, FlatDamage):
        return str(expression.amount)
    if isinstance(expression, CoinFlipDamage):
        return f"{expression.amount}{COIN_FLIP_SIGN}"
    if isinstance(expression, EnergyBonusDamage):
        return f"{expression.base}+"
    if isinstance(expression, CompoundDamage):
        return "+".join(str(part) for part in expression.parts)
    raise TypeError(f"Unknown damage expression: {expression!r}")


def expected_damage(text: str | None, energy_bonus_cap: int = 0) -> float:
    """Expected damage of a printed damage string."""
    return parse_damage(text, energy_bonus_cap).expected_value()
