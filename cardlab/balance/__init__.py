"""Balance calculator - deterministic strength scores for Pokemon cards."""

from .result import (
    BalanceCategory,
    CardStrengthResult,
    StrengthBonuses,
    StrengthBreakdown,
    StrengthPenalties,
    balance_category_for,
)
from .calculator import CardStrengthCalculator, calculate_strength

__all__ = [
    "BalanceCategory",
    "CardStrengthResult",
    "StrengthBonuses",
    "StrengthBreakdown",
    "StrengthPenalties",
    "balance_category_for",
    "CardStrengthCalculator",
    "calculate_strength",
]
