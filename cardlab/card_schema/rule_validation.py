"""
Rule list validation.

Checks a whole list of card rules in one pass and reports every problem:
1. Each entry builds into a valid CardRule (metadata invariants included)
2. No entry is something other than a rule or rule-shaped mapping

Duplicate rule kinds and contradictory pairs are reported as warnings;
they are legal but usually a data-entry mistake.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .card_rules import CardRule, CardRuleType
from .errors import CardDataError, CardRuleValidationError

logger = logging.getLogger(__name__)

_CONTRADICTIONS = (
    (CardRuleType.CANNOT_RETREAT, CardRuleType.FREE_RETREAT),
    (CardRuleType.EXTRA_PRIZE_CARDS, CardRuleType.NO_PRIZE_CARDS),
    (CardRuleType.CAN_EVOLVE_TURN_ONE, CardRuleType.CANNOT_EVOLVE),
)


@dataclass
class RuleValidationResult:
    """Result of rule list validation, with errors and warnings."""
    valid: bool
    rules: tuple[CardRule, ...] = ()
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def check_card_rules(rules: Iterable[CardRule | Mapping[str, Any]]) -> RuleValidationResult:
    """
    Validate every rule in a list.

    Entries may be CardRule instances or JSON-shaped mappings. Returns the
    built rules only when every entry is valid.
    """
    errors: list[str] = []
    warnings: list[str] = []
    built: list[CardRule] = []

    if isinstance(rules, (str, bytes, Mapping)):
        return RuleValidationResult(valid=False, errors=["Rules must be a list"])

    for index, entry in enumerate(rules):
        label = _label(entry)
        if isinstance(entry, CardRule):
            built.append(entry)
            continue
        if not isinstance(entry, Mapping):
            errors.append(f"Rule at index {index}: expected a rule, got {type(entry).__name__}")
            continue
        try:
            built.append(CardRule.from_data(entry))
        except CardDataError as exc:
            errors.append(f"Rule at index {index} ({label}): {exc}")

    if errors:
        return RuleValidationResult(valid=False, errors=errors, warnings=warnings)

    counts = Counter(rule.rule_type for rule in built)
    for rule_type, count in counts.items():
        if count > 1:
            warnings.append(f"{rule_type.value} appears {count} times")
    for first, second in _CONTRADICTIONS:
        if first in counts and second in counts:
            warnings.append(f"{first.value} and {second.value} contradict each other")

    return RuleValidationResult(valid=True, rules=tuple(built), warnings=warnings)


def validate_card_rules(rules: Iterable[CardRule | Mapping[str, Any]]) -> tuple[CardRule, ...]:
    """
    Validate a rule list atomically.

    Returns the built rules, or raises CardRuleValidationError listing every
    offending rule. Nothing is returned for a partially valid list.
    """
    result = check_card_rules(rules)
    if not result.valid:
        logger.warning("Rejected rule list with %d error(s)", len(result.errors))
        raise CardRuleValidationError(result.errors)
    for warning in result.warnings:
        logger.debug("Card rule warning: %s", warning)
    return result.rules


def _label(entry: Any) -> str:
    if isinstance(entry, CardRule):
        return entry.rule_type.value
    if isinstance(entry, Mapping):
        return str(entry.get("ruleType") or entry.get("rule_type") or "unknown rule type")
    return "not a rule"
