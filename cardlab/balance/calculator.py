"""
Card Strength Calculator - scores a Pokemon card's balance from 0 to 100.

The score combines three sub-scores:
- HP strength: HP against the stage's expected HP, adjusted for weakness
  and resistance, weighted by how cheap the stage is to get into play
- Attack strength: average damage per energy over the card's attacks,
  minus drawbacks, plus efficiency and opponent-effect bonuses
- Ability strength: a flat value scaled by evolution stage

The normalized total is then adjusted by flat penalties (self-damage
sustainability, evolution dependency, prize liability, evolution tax) and
bonuses (retreat cost, basic Pokemon), clamped, and mapped to a category.

Coin-flip and energy-bonus damage use closed-form expected values, so the
same card always gets the same score.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import NamedTuple, Optional

from ..card_schema.attack_effects import AttackEffectType, attack_effect_type
from ..card_schema.card import Card
from ..card_schema.damage import CoinFlipDamage
from ..card_schema.enums import (
    CardType,
    EvolutionStage,
    PreconditionType,
    StatusCondition,
    TargetType,
)
from ..card_schema.values import Attack
from . import text_signals
from .result import (
    CardStrengthResult,
    StrengthBonuses,
    StrengthBreakdown,
    StrengthPenalties,
    balance_category_for,
)

logger = logging.getLogger(__name__)

# Normalization maxima
HP_MAX = 200
ATTACK_MAX = 50
ABILITY_MAX = 150
TOTAL_MAX = 250
TOTAL_MAX_WITH_ABILITY = 300

BASE_ABILITY_VALUE = 50
DEFAULT_EXPECTED_HP = 100

_EXPECTED_HP: dict[EvolutionStage, int] = {
    EvolutionStage.BASIC: 60,
    EvolutionStage.STAGE_1: 80,
}

_EVOLUTION_VALUE: dict[EvolutionStage, float] = {
    EvolutionStage.BASIC: 1.0,
    EvolutionStage.STAGE_1: 0.5,
    EvolutionStage.STAGE_2: 0.33,
}

_EVOLUTION_TAX: dict[EvolutionStage, float] = {
    EvolutionStage.STAGE_1: 3,
    EvolutionStage.STAGE_2: 8,
}

# First and second forms of three-stage lines
_EVOLUTION_DEPENDENCY: dict[str, float] = {
    "Caterpie": 5,
    "Weedle": 5,
    "Metapod": 3,
    "Kakuna": 3,
}

# (minimum % of own HP, penalty), highest first
_SUSTAINABILITY_TIERS = ((80, 30), (66, 20), (50, 12), (33, 6), (25, 3))
_SELF_DAMAGE_DRAWBACK_TIERS = ((50, 5), (25, 3))

_EFFICIENCY_BONUS_TIERS = ((20, 10), (15, 6), (12, 3))


class EffectRole(str, Enum):
    """How a structured attack effect feeds the scorer."""
    SELF_DAMAGE = "self_damage"
    ENERGY_DISCARD = "energy_discard"
    OPPONENT_STATUS = "opponent_status"
    SUPPORT = "support"
    NEUTRAL = "neutral"


_EFFECT_ROLES: dict[AttackEffectType, EffectRole] = {
    AttackEffectType.DISCARD_ENERGY: EffectRole.ENERGY_DISCARD,
    AttackEffectType.STATUS_CONDITION: EffectRole.OPPONENT_STATUS,
    AttackEffectType.DAMAGE_MODIFIER: EffectRole.NEUTRAL,
    AttackEffectType.HEAL: EffectRole.SUPPORT,
    AttackEffectType.PREVENT_DAMAGE: EffectRole.SUPPORT,
    AttackEffectType.RECOIL_DAMAGE: EffectRole.SELF_DAMAGE,
    AttackEffectType.ENERGY_ACCELERATION: EffectRole.NEUTRAL,
    AttackEffectType.SWITCH_POKEMON: EffectRole.NEUTRAL,
    AttackEffectType.MOVE_DAMAGE_COUNTER: EffectRole.NEUTRAL,
}

_missing_roles = set(AttackEffectType) - set(_EFFECT_ROLES)
if _missing_roles:
    raise RuntimeError(
        f"No scoring role for attack effects: {sorted(t.value for t in _missing_roles)}"
    )


class SubScore(NamedTuple):
    """A sub-score before and after normalization."""
    raw: float
    normalized: float


def normalize(raw: float, maximum: float) -> float:
    """Scale raw against maximum to 0-100, clamped."""
    return min(100.0, max(0.0, raw / maximum * 100))


def evolution_value(stage: Optional[EvolutionStage]) -> float:
    return _EVOLUTION_VALUE.get(stage, 1.0)


def expected_hp(stage: Optional[EvolutionStage]) -> int:
    """Expected HP for a stage; cards without a stage count as Basic."""
    return _EXPECTED_HP.get(stage or EvolutionStage.BASIC, DEFAULT_EXPECTED_HP)


def _effects_with_role(attack: Attack, role: EffectRole) -> list:
    return [
        effect
        for effect in attack.effects or ()
        if _EFFECT_ROLES[attack_effect_type(effect)] == role
    ]


class CardStrengthCalculator:
    """
    Stateless scorer. Each sub-score is exposed for inspection; use
    `calculate()` (or the module-level `calculate_strength`) for the full
    result.
    """

    def calculate(self, card: Card) -> CardStrengthResult:
        if card.card_type != CardType.POKEMON or not card.hp:
            return CardStrengthResult.empty()

        hp_score = self.hp_strength(card)
        attack_score = self.attack_strength(card)
        ability_score = self.ability_strength(card)

        raw_total = hp_score.raw + attack_score.raw + ability_score.raw
        maximum = TOTAL_MAX_WITH_ABILITY if card.ability else TOTAL_MAX
        total = normalize(raw_total, maximum)

        penalties = StrengthPenalties(
            sustainability=self.sustainability_penalty(card),
            evolution_dependency=self.evolution_dependency_penalty(card),
            prize_liability=self.prize_liability_penalty(card),
            evolution=self.evolution_penalty(card),
        )
        bonuses = StrengthBonuses(
            retreat_cost=self.retreat_cost_bonus(card),
            basic_pokemon=self.basic_pokemon_bonus(card),
        )

        total = total - penalties.total() + bonuses.total()
        total = max(0.0, min(100.0, total))

        result = CardStrengthResult(
            total_strength=total,
            balance_category=balance_category_for(total),
            breakdown=StrengthBreakdown(
                hp_strength=hp_score.normalized,
                attack_strength=attack_score.normalized,
                ability_strength=ability_score.normalized,
            ),
            penalties=penalties,
            bonuses=bonuses,
        )
        logger.debug(
            "Scored %s: %.2f (%s)", card.card_id, total, result.balance_category.value
        )
        return result

    # ---- HP ----

    def hp_efficiency(self, card: Card) -> float:
        """HP relative to the stage's expected HP, after weakness and resistance."""
        efficiency = (card.hp or 0) / expected_hp(card.stage)

        if card.weakness is not None and card.weakness.modifier == "×2":
            efficiency -= 0.25 + efficiency * 0.12

        if card.resistance is not None:
            reduction = card.resistance.reduction
            if reduction >= 30:
                efficiency += 0.3 + efficiency * 0.18
            elif reduction >= 20:
                efficiency += 0.18 + efficiency * 0.12

        return efficiency

    def hp_strength(self, card: Card) -> SubScore:
        raw = evolution_value(card.stage) * (card.hp or 0) * self.hp_efficiency(card)
        return SubScore(raw, normalize(raw, HP_MAX))

    # ---- Attacks ----

    def average_damage(self, attack: Attack) -> float:
        """Expected damage, including a printed "if heads, N more damage" bonus."""
        average = attack.expected_damage()
        if not isinstance(attack.damage, CoinFlipDamage):
            average = text_signals.heads_adjusted_damage(attack.text, average)
        return average

    def self_damage(self, attack: Attack) -> int:
        """Damage the attack does to its user, from text or RECOIL_DAMAGE effects."""
        recoil = [effect.amount for effect in _effects_with_role(attack, EffectRole.SELF_DAMAGE)]
        return max([text_signals.self_damage(attack.text), *recoil])

    def has_coin_flip(self, attack: Attack) -> bool:
        return text_signals.has_coin_flip(attack.text) or bool(
            attack.get_preconditions_by_type(PreconditionType.COIN_FLIP)
        )

    def energy_discard_amount(self, attack: Attack) -> Optional[int]:
        """Energy the attacker discards from itself, None if it discards none."""
        amount = text_signals.energy_discard_amount(attack.text)
        if amount is not None:
            return amount
        for effect in _effects_with_role(attack, EffectRole.ENERGY_DISCARD):
            if effect.target == TargetType.SELF:
                return text_signals.ALL_ENERGY if effect.amount == "all" else effect.amount
        return None

    def coin_flip_penalty(self, attack: Attack, average_damage: float) -> float:
        if not self.has_coin_flip(attack):
            return 0.0
        cost = attack.total_energy_cost
        if cost >= 4:
            multiplier = 2.5
        elif cost >= 3:
            multiplier = 1.5
        else:
            multiplier = 1.0
        damage_per_energy = average_damage / cost if cost > 0 else 0
        # Still efficient with the flip
        if damage_per_energy >= 15:
            multiplier *= 0.5
        return multiplier

    def drawback_penalty(self, attack: Attack, card: Card) -> float:
        penalty = 0.0

        self_damage = self.self_damage(attack)
        if self_damage > 0 and card.hp:
            percentage = self_damage / card.hp * 100
            penalty += next(
                (value for minimum, value in _SELF_DAMAGE_DRAWBACK_TIERS if percentage >= minimum),
                1,
            )

        penalty += text_signals.self_status_penalty(attack.text)
        penalty += text_signals.energy_discard_penalty(
            self.energy_discard_amount(attack), attack.text
        )
        penalty += text_signals.card_discard_penalty(attack.text)
        penalty += self.coin_flip_penalty(attack, attack.expected_damage())
        penalty += text_signals.lockout_penalty(attack.text)
        return penalty

    def energy_efficiency_penalty(self, average_damage: float, cost: int) -> float:
        """Expensive attacks that deal too little per energy."""
        if cost < 3:
            return 0.0
        damage_per_energy = average_damage / cost
        threshold = 10 if cost >= 4 else 8
        if damage_per_energy < threshold:
            return float(min(5, math.floor((threshold - damage_per_energy) / 2)))
        return 0.0

    def efficiency_bonus(self, average_damage: float, cost: int) -> float:
        if cost == 0:
            return 0.0
        damage_per_energy = average_damage / cost
        for minimum, bonus in _EFFICIENCY_BONUS_TIERS:
            if damage_per_energy >= minimum:
                return float(bonus)
        return 0.0

    def effect_bonus(self, attack: Attack) -> float:
        """Bonus for effects aimed at the opponent; 0 when the text targets the attacker."""
        if text_signals.targets_self(attack.text):
            return 0.0

        inflicted = {
            effect.status_condition
            for effect in _effects_with_role(attack, EffectRole.OPPONENT_STATUS)
        }
        poison = text_signals.poison_bonus(attack.text)
        if poison == 0 and StatusCondition.POISONED in inflicted:
            poison = 3.0
        if poison > 0:
            return poison

        if not (attack.has_effects() or text_signals.mentions_status(attack.text)):
            return 0.0
        status = text_signals.opponent_status_bonus(attack.text, inflicted)
        if status > 0:
            return status
        if text_signals.mentions_support(attack.text) or _effects_with_role(
            attack, EffectRole.SUPPORT
        ):
            return 1.0
        return 0.0

    def attack_score(self, attack: Attack, card: Card) -> float:
        """Raw strength of one attack."""
        average = self.average_damage(attack)
        cost = attack.total_energy_cost
        score = average / cost if cost > 0 else 0.0

        score -= self.drawback_penalty(attack, card)
        score -= self.energy_efficiency_penalty(average, cost)
        score += self.efficiency_bonus(average, cost)
        score = max(0.0, score)

        return score + self.effect_bonus(attack)

    def attack_strength(self, card: Card) -> SubScore:
        if not card.attacks:
            return SubScore(0.0, 0.0)
        scores = [self.attack_score(attack, card) for attack in card.attacks]
        raw = sum(scores) / len(scores)
        return SubScore(raw, normalize(raw, ATTACK_MAX))

    # ---- Ability ----

    def ability_strength(self, card: Card) -> SubScore:
        if card.ability is None:
            return SubScore(0.0, 0.0)
        raw = (1 / evolution_value(card.stage)) * BASE_ABILITY_VALUE
        return SubScore(raw, normalize(raw, ABILITY_MAX))

    # ---- Penalties ----

    def sustainability_penalty(self, card: Card) -> float:
        """
        Penalty for attacks that hurt their user, by the worst one.

        Halved when the card also has an attack without self-damage.
        """
        if not card.attacks or not card.hp:
            return 0.0
        self_damages = [self.self_damage(attack) for attack in card.attacks]
        worst = max(self_damages)
        if worst == 0:
            return 0.0
        percentage = worst / card.hp * 100
        penalty = next(
            (value for minimum, value in _SUSTAINABILITY_TIERS if percentage >= minimum),
            1,
        )
        if 0 in self_damages:
            return penalty * 0.5
        return float(penalty)

    def evolution_dependency_penalty(self, card: Card) -> float:
        return float(_EVOLUTION_DEPENDENCY.get(card.name, 0))

    def prize_liability_penalty(self, card: Card) -> float:
        """Pokemon far below their stage's expected HP give up prizes cheaply."""
        ratio = (card.hp or 0) / expected_hp(card.stage)
        if ratio < 0.5:
            return float(min(5, math.floor((0.5 - ratio) * 10)))
        return 0.0

    def evolution_penalty(self, card: Card) -> float:
        return float(_EVOLUTION_TAX.get(card.stage, 0))

    # ---- Bonuses ----

    def retreat_cost_bonus(self, card: Card) -> float:
        cost = card.retreat_cost or 0
        if cost == 0:
            return 5.0
        if cost == 1:
            return 2.0
        if cost >= 3:
            return -2.0
        return 0.0

    def basic_pokemon_bonus(self, card: Card) -> float:
        return 5.0 if card.stage == EvolutionStage.BASIC else 0.0


_calculator = CardStrengthCalculator()


def calculate_strength(card: Card) -> CardStrengthResult:
    """Score a card. Non-Pokemon cards and cards without HP get the empty result."""
    return _calculator.calculate(card)
