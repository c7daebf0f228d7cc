"""
Cardlab - Trading Card Rule Data Core

Models a trading-card game's rule text as structured, validated data and
computes a deterministic balance score for a card. The package provides:
- Closed effect variants for attacks, abilities and trainer cards
- Passive card rules with priority ordering
- An immutable Card aggregate built through a type-gated builder
- A multi-factor strength calculator
"""

__version__ = "0.1.0"
