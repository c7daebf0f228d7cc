"""
Tests for card value objects.

Tests:
- Weakness / Resistance modifier formats
- Energy provision special-energy rule
- Attack damage parsing and queries
- Ability activation rules
"""

import pytest

from ..card_schema.ability_effects import AbilityEffectType, DrawCardsEffect
from ..card_schema.attack_effects import AttackEffectType
from ..card_schema.damage import CoinFlipDamage, EnergyBonusDamage, FlatDamage, NoDamage
from ..card_schema.enums import (
    AbilityActivationType,
    EnergyType,
    EvolutionStage,
    GameEventType,
    PokemonType,
    PreconditionType,
    UsageLimit,
)
from ..card_schema.errors import (
    CardDataError,
    InvalidFormatError,
    InvariantViolationError,
    MissingFieldError,
)
from ..card_schema.values import (
    Ability,
    Attack,
    EnergyProvision,
    Evolution,
    Resistance,
    Weakness,
)


class TestWeaknessResistance:
    """Tests for damage modifiers."""

    @pytest.mark.parametrize("modifier,operator,amount", [("×2", "×", 2), ("+20", "+", 20)])
    def test_weakness_modifier(self, modifier, operator, amount):
        weakness = Weakness(type=PokemonType.FIRE, modifier=modifier)
        assert weakness.operator == operator
        assert weakness.amount == amount
        assert weakness.is_multiplier == (operator == "×")

    @pytest.mark.parametrize("modifier", ["x2", "2", "-20", "×", ""])
    def test_weakness_format_enforced(self, modifier):
        with pytest.raises(InvalidFormatError):
            Weakness(type=PokemonType.FIRE, modifier=modifier)

    def test_resistance_reduction(self):
        assert Resistance(type=PokemonType.FIGHTING, modifier="-30").reduction == 30

    @pytest.mark.parametrize("modifier", ["30", "+30", "-", "×2"])
    def test_resistance_format_enforced(self, modifier):
        with pytest.raises(InvalidFormatError):
            Resistance(type=PokemonType.FIGHTING, modifier=modifier)

    def test_unknown_type(self):
        with pytest.raises(CardDataError):
            Weakness.from_data({"type": "SOUND", "modifier": "×2"})


class TestEvolution:

    def test_evolution_link(self):
        evolution = Evolution.from_data({"pokemonNumber": "005", "stage": "STAGE_1"})
        assert evolution.stage == EvolutionStage.STAGE_1
        assert evolution.condition is None

    def test_number_required(self):
        with pytest.raises(CardDataError):
            Evolution(pokemon_number="", stage=EvolutionStage.STAGE_1)


class TestEnergyProvision:
    """Tests for the special-energy rule."""

    def test_basic_energy(self):
        provision = EnergyProvision(energy_types=[EnergyType.FIRE])
        assert provision.is_basic_energy()
        assert provision.primary_type == EnergyType.FIRE
        assert provision.describe() == "Provides FIRE Energy"

    @pytest.mark.parametrize("extra", [
        {"amount": 2},
        {"restrictions": ["Only Pokémon with Fire in their name"]},
        {"additional_effects": "Heal 10 damage when attached"},
    ])
    def test_special_flag_required(self, extra):
        with pytest.raises(InvariantViolationError):
            EnergyProvision(energy_types=[EnergyType.COLORLESS], is_special=False, **extra)

    def test_double_colorless(self):
        provision = EnergyProvision(energy_types=[EnergyType.COLORLESS], amount=2, is_special=True)
        assert not provision.is_basic_energy()
        assert provision.provides_colorless()
        assert provision.describe() == "Provides 2 COLORLESS Energy"

    def test_multi_type(self):
        provision = EnergyProvision(
            energy_types=[EnergyType.WATER, EnergyType.LIGHTNING], is_special=True
        )
        assert provision.provides_type(EnergyType.LIGHTNING)
        assert not provision.provides_type(EnergyType.FIRE)

    def test_types_required(self):
        with pytest.raises(CardDataError):
            EnergyProvision(energy_types=[])

    @pytest.mark.parametrize("amount", ["2", True, 2.0])
    def test_amount_must_be_integer(self, amount):
        with pytest.raises(InvalidFormatError) as exc_info:
            EnergyProvision.from_data(
                {"energyTypes": ["COLORLESS"], "amount": amount, "isSpecial": True}
            )
        assert exc_info.value.field == "amount"


class TestAttack:
    """Tests for attacks."""

    def test_flat_attack(self, ember):
        assert ember.damage == FlatDamage(amount=30)
        assert ember.total_energy_cost == 1
        assert ember.deals_damage()
        assert ember.expected_damage() == 30
        assert ember.damage_text == "30"

    def test_no_damage_default(self):
        attack = Attack(name="Growl", energy_cost=[EnergyType.COLORLESS])
        assert isinstance(attack.damage, NoDamage)
        assert not attack.deals_damage()
        assert attack.text == ""

    def test_energy_bonus_uses_cap(self):
        attack = Attack.from_data({
            "name": "Hydro Pump",
            "energyCost": ["WATER", "WATER", "WATER"],
            "damage": "40+",
            "energyBonusCap": 2,
        })
        assert attack.damage == EnergyBonusDamage(base=40, cap=2)
        assert attack.expected_damage() == 50

    def test_parsed_energy_bonus_takes_attack_cap(self):
        attack = Attack(
            name="Hydro Pump",
            energy_cost=[EnergyType.WATER] * 3,
            energy_bonus_cap=2,
            damage=EnergyBonusDamage(base=40),
        )
        assert attack.damage == EnergyBonusDamage(base=40, cap=2)
        assert attack.expected_damage() == 50

    def test_parsed_energy_bonus_keeps_own_cap_without_attack_cap(self):
        attack = Attack(name="Hydro Pump", damage={"kind": "energy_bonus", "base": 40, "cap": 1})
        assert attack.damage.cap == 1
        assert attack.expected_damage() == 45

    def test_bonus_cap_must_be_integer(self):
        with pytest.raises(InvalidFormatError):
            Attack.from_data({"name": "Hydro Pump", "damage": "40+", "energyBonusCap": "2"})

    def test_coin_flip_damage(self):
        attack = Attack(name="Doubleslap", energy_cost=[EnergyType.COLORLESS], damage="20×")
        assert isinstance(attack.damage, CoinFlipDamage)
        assert attack.expected_damage() == 10

    def test_malformed_damage(self):
        with pytest.raises(InvalidFormatError):
            Attack(name="Broken", damage="lots")

    def test_dump_renders_printed_damage(self):
        attack = Attack(name="Doubleslap", energy_cost=[EnergyType.COLORLESS], damage="20×")
        data = attack.to_data()
        assert data["damage"] == "20×"
        assert Attack.from_data(data) == attack

    def test_energy_count_by_type(self):
        attack = Attack(
            name="Fire Spin",
            energy_cost=[EnergyType.FIRE, EnergyType.FIRE, EnergyType.COLORLESS],
            damage="100",
        )
        assert attack.energy_count_by_type(EnergyType.FIRE) == 2
        assert attack.energy_count_by_type(EnergyType.WATER) == 0

    def test_effects_by_type(self):
        attack = Attack.from_data({
            "name": "Take Down",
            "energyCost": ["COLORLESS", "COLORLESS"],
            "damage": "40",
            "text": "Pikachu does 10 damage to itself.",
            "effects": [
                {"effectType": "RECOIL_DAMAGE", "amount": 10},
                {"effectType": "STATUS_CONDITION", "statusCondition": "PARALYZED"},
            ],
        })
        assert attack.has_effects()
        assert len(attack.get_effects_by_type(AttackEffectType.RECOIL_DAMAGE)) == 1
        assert attack.get_effects_by_type(AttackEffectType.HEAL) == []

    def test_preconditions(self):
        attack = Attack.from_data({
            "name": "Double Kick",
            "energyCost": ["FIGHTING"],
            "damage": "30×",
            "preconditions": [{
                "type": "COIN_FLIP",
                "value": {"numberOfCoins": 2},
                "description": "Flip 2 coins",
            }],
        })
        assert attack.has_preconditions()
        assert len(attack.get_preconditions_by_type(PreconditionType.COIN_FLIP)) == 1

    def test_minimum_damage_precondition_needs_amount(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Attack.from_data({
                "name": "Revenge",
                "preconditions": [{
                    "type": "DAMAGE_CHECK",
                    "value": {"condition": "minimum_damage"},
                    "description": "If this Pokémon has damage",
                }],
            })
        assert exc_info.value.field == "minimum_damage"

    def test_negative_bonus_cap(self):
        with pytest.raises(CardDataError):
            Attack(name="Bad", damage="40+", energy_bonus_cap=-1)


class TestAbility:
    """Tests for abilities."""

    def test_passive(self):
        ability = Ability(
            name="Energy Burn",
            text="All energy attached to Charizard are Fire.",
            activation_type=AbilityActivationType.PASSIVE,
            effects=[DrawCardsEffect(count=1)],
        )
        assert ability.is_passive()
        assert ability.activation_description() == "Always active"

    def test_passive_rejects_usage_limit(self):
        with pytest.raises(InvariantViolationError):
            Ability(
                name="Aura",
                text="Always on.",
                activation_type=AbilityActivationType.PASSIVE,
                effects=[DrawCardsEffect(count=1)],
                usage_limit=UsageLimit.ONCE_PER_TURN,
            )

    def test_triggered_requires_event(self):
        with pytest.raises(MissingFieldError):
            Ability(
                name="Strikes Back",
                text="When damaged, do 10 damage back.",
                activation_type=AbilityActivationType.TRIGGERED,
                effects=[DrawCardsEffect(count=1)],
            )

    def test_only_triggered_has_event(self):
        with pytest.raises(InvariantViolationError):
            Ability(
                name="Rain Dance",
                text="Attach water energy.",
                activation_type=AbilityActivationType.ACTIVATED,
                effects=[DrawCardsEffect(count=1)],
                trigger_event=GameEventType.WHEN_PLAYED,
            )

    def test_triggered(self):
        ability = Ability(
            name="Strikes Back",
            text="When damaged, do 10 damage back.",
            activation_type=AbilityActivationType.TRIGGERED,
            effects=[DrawCardsEffect(count=1)],
            trigger_event=GameEventType.WHEN_DAMAGED,
        )
        assert ability.activation_description() == "Activates when damaged"

    def test_activated_once_per_turn(self):
        ability = Ability.from_data({
            "name": "Rain Dance",
            "text": "As often as you like during your turn, attach a Water Energy.",
            "activationType": "ACTIVATED",
            "usageLimit": "ONCE_PER_TURN",
            "effects": [{
                "effectType": "ENERGY_ACCELERATION",
                "target": "all_yours",
                "source": "hand",
                "count": 1,
                "energyType": "WATER",
            }],
        })
        assert ability.is_activated()
        assert ability.activation_description() == "Once per turn - Player activates"
        assert len(ability.get_effects_by_type(AbilityEffectType.ENERGY_ACCELERATION)) == 1

    def test_effects_required(self):
        with pytest.raises(CardDataError):
            Ability(
                name="Nothing",
                text="Does nothing.",
                activation_type=AbilityActivationType.PASSIVE,
                effects=[],
            )
