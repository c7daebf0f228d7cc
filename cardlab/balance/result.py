"""
Strength calculation result.

Dumped with `model_dump(by_alias=True)` (or `to_data()`) a result has the
camelCase shape presentation layers expect:

    {
      "totalStrength": 47.0,
      "balanceCategory": "balanced",
      "breakdown": {"hpStrength", "attackStrength", "abilityStrength"},
      "penalties": {"sustainability", "evolutionDependency", "prizeLiability", "evolution"},
      "bonuses": {"retreatCost", "basicPokemon"}
    }
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from ..card_schema.base import CardValueModel


class BalanceCategory(str, Enum):
    """Verdict bands for a total strength score."""
    VERY_WEAK = "very_weak"
    WEAK = "weak"
    BALANCED = "balanced"
    STRONG = "strong"
    TOO_STRONG = "too_strong"


# Upper bound (inclusive) of each band; anything above the last is TOO_STRONG
_CATEGORY_BOUNDS: tuple[tuple[float, BalanceCategory], ...] = (
    (30, BalanceCategory.VERY_WEAK),
    (45, BalanceCategory.WEAK),
    (54, BalanceCategory.BALANCED),
    (70, BalanceCategory.STRONG),
)


def balance_category_for(score: float) -> BalanceCategory:
    for bound, category in _CATEGORY_BOUNDS:
        if score <= bound:
            return category
    return BalanceCategory.TOO_STRONG


class StrengthBreakdown(CardValueModel):
    """Normalized (0-100) sub-scores."""
    hp_strength: float = 0.0
    attack_strength: float = 0.0
    ability_strength: float = 0.0


class StrengthPenalties(CardValueModel):
    sustainability: float = 0.0
    evolution_dependency: float = 0.0
    prize_liability: float = 0.0
    evolution: float = 0.0

    def total(self) -> float:
        return (
            self.sustainability
            + self.evolution_dependency
            + self.prize_liability
            + self.evolution
        )


class StrengthBonuses(CardValueModel):
    # Retreat cost bonus is negative for heavy retreaters
    retreat_cost: float = 0.0
    basic_pokemon: float = 0.0

    def total(self) -> float:
        return self.retreat_cost + self.basic_pokemon


class CardStrengthResult(CardValueModel):
    """Balance verdict for one card. Recomputed on demand, never stored."""
    total_strength: float = Field(default=0.0, ge=0, le=100)
    balance_category: BalanceCategory = BalanceCategory.VERY_WEAK
    breakdown: StrengthBreakdown = Field(default_factory=StrengthBreakdown)
    penalties: StrengthPenalties = Field(default_factory=StrengthPenalties)
    bonuses: StrengthBonuses = Field(default_factory=StrengthBonuses)

    @classmethod
    def empty(cls) -> "CardStrengthResult":
        """Result for cards that cannot be scored (non-Pokemon, or no HP)."""
        return cls()
