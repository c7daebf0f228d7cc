"""
Rule-text heuristics used by the strength calculator.

Older cards carry most of their drawbacks only in printed text, so the
scorer reads a handful of signals from it. Every function here takes the
raw attack text (possibly empty) and is case-insensitive.
"""

from __future__ import annotations

import re
from typing import Collection, Optional

from ..card_schema.enums import StatusCondition

_HEADS_BONUS = (re.compile(r"plus (\d+)"), re.compile(r"(\d+) more"))
_SELF_DAMAGE = (
    re.compile(r"does\s+(\d+)\s+damage\s+to\s+(itself|this)"),
    re.compile(r"(\d+)\s+damage\s+to\s+(itself|this)"),
)
_ENERGY_DISCARD_COUNT = re.compile(r"discard\s+(\d+)\s+energy")
_ENERGY_DISCARD_WORD = re.compile(r"discard\s+(\w+)\s+energy")
_CARD_DISCARD_COUNT = re.compile(r"discard\s+(\d+)\s+card")

# Penalty for the attacker ending up with each condition
_SELF_STATUS_PENALTIES = (("asleep", 2), ("confused", 2), ("paralyzed", 3))

# Opponent status bonuses, first match wins
_OPPONENT_STATUS_BONUSES = (
    (StatusCondition.PARALYZED, ("paralyzed",), 2.0),
    (StatusCondition.CONFUSED, ("confused",), 2.0),
    (StatusCondition.ASLEEP, ("asleep", "sleep"), 1.5),
    (StatusCondition.BURNED, ("burned", "burn"), 1.0),
)

ALL_ENERGY = 10
DEFAULT_DISCARD = 2


def _lower(text: Optional[str]) -> str:
    return (text or "").lower()


def _int_or(value: str, default: int) -> int:
    try:
        return int(value) or default
    except ValueError:
        return default


def has_coin_flip(text: Optional[str]) -> bool:
    lowered = _lower(text)
    return "flip a coin" in lowered or "coin flip" in lowered


def heads_adjusted_damage(text: Optional[str], average_damage: float) -> float:
    """
    Average damage for "flip a coin; if heads, this attack does N more" text.

    A printed bonus averages base and base+bonus; without one the base
    damage itself is halved. Text without a heads bonus is left alone.
    """
    lowered = _lower(text)
    if not has_coin_flip(lowered) or "heads" not in lowered:
        return average_damage
    if "plus" not in lowered and "more damage" not in lowered:
        return average_damage
    for pattern in _HEADS_BONUS:
        match = pattern.search(lowered)
        if match:
            bonus = int(match.group(1))
            return (average_damage + (average_damage + bonus)) / 2
    return average_damage / 2


def targets_self(text: Optional[str]) -> bool:
    """True when the text talks about the attacking Pokemon itself."""
    lowered = _lower(text)
    return any(
        phrase in lowered
        for phrase in ("this pokémon", "this pokemon", "itself", "this attack")
    )


def self_damage(text: Optional[str]) -> int:
    """Damage the attack does to its own user, 0 if none is printed."""
    lowered = _lower(text)
    mentions_self_damage = (
        "damage to itself" in lowered
        or "damage to this" in lowered
        or (
            "does" in lowered
            and "damage" in lowered
            and ("itself" in lowered or "this" in lowered)
        )
    )
    if not mentions_self_damage:
        return 0
    for pattern in _SELF_DAMAGE:
        match = pattern.search(lowered)
        if match:
            return int(match.group(1))
    return 0


def self_status_penalty(text: Optional[str]) -> float:
    lowered = _lower(text)
    penalty = 0.0
    for condition, value in _SELF_STATUS_PENALTIES:
        if (
            f"this pokémon is now {condition}" in lowered
            or f"this pokemon is now {condition}" in lowered
            or (condition in lowered and "this" in lowered)
        ):
            penalty += value
    return penalty


def energy_discard_amount(text: Optional[str]) -> Optional[int]:
    """
    Number of energy the text discards, None when it discards none.

    "all" counts as ALL_ENERGY; an unreadable count as DEFAULT_DISCARD.
    """
    lowered = _lower(text)
    match = _ENERGY_DISCARD_COUNT.search(lowered) or _ENERGY_DISCARD_WORD.search(lowered)
    if match:
        amount = match.group(1)
        if amount == "all" or "all energy" in lowered:
            return ALL_ENERGY
        return _int_or(amount, DEFAULT_DISCARD)
    if "discard" in lowered and "energy" in lowered:
        return ALL_ENERGY if "all energy" in lowered else DEFAULT_DISCARD
    return None


def energy_discard_penalty(amount: Optional[int], text: Optional[str]) -> float:
    if amount is None:
        return 0.0
    if amount >= 3 or "all" in _lower(text):
        return 3.0
    if amount == 2:
        return 2.0
    return 1.0


def card_discard_penalty(text: Optional[str]) -> float:
    """Discarding cards from hand or deck, capped at 2."""
    lowered = _lower(text)
    if "discard" not in lowered or ("hand" not in lowered and "deck" not in lowered):
        return 0.0
    match = _CARD_DISCARD_COUNT.search(lowered)
    if not match:
        return 0.0
    return float(min(_int_or(match.group(1), 1), 2))


def lockout_penalty(text: Optional[str]) -> float:
    """Attacker cannot attack (3) or retreat (1) during its next turn."""
    lowered = _lower(text)
    if "next turn" not in lowered:
        return 0.0
    penalty = 0.0
    if "cannot attack" in lowered:
        penalty += 3
    if "cannot retreat" in lowered:
        penalty += 1
    return penalty


def poison_bonus(text: Optional[str]) -> float:
    """4 for 20-HP poison, 3 for ordinary poison, 0 otherwise."""
    lowered = _lower(text)
    if "20 poison" in lowered:
        return 4.0
    if "poisoned" in lowered:
        return 3.0
    return 0.0


def mentions_status(text: Optional[str]) -> bool:
    lowered = _lower(text)
    return any(
        word in lowered for word in ("confused", "paralyzed", "asleep", "poison", "burn")
    )


def opponent_status_bonus(
    text: Optional[str], inflicted: Collection[StatusCondition] = ()
) -> float:
    """
    Bonus for a non-poison special condition put on the defender.

    `inflicted` holds conditions from structured effects; printed text only
    counts when it does not mention "this".
    """
    lowered = _lower(text)
    printed = "this" not in lowered
    for status, words, bonus in _OPPONENT_STATUS_BONUSES:
        if status in inflicted or (printed and any(word in lowered for word in words)):
            return bonus
    return 0.0


def mentions_support(text: Optional[str]) -> bool:
    lowered = _lower(text)
    return "prevent" in lowered or "heal" in lowered
