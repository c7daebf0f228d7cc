"""
Pytest fixtures for Cardlab tests.
"""

import logging

import pytest

from ..card_schema import (
    Attack,
    Card,
    CardBuilder,
    EnergyType,
    EvolutionStage,
    PokemonType,
)
from ..config import reset_settings


def pokemon_builder(name: str = "Charmander", number: str = "004") -> CardBuilder:
    """Pokemon builder with throwaway identity fields."""
    return CardBuilder.pokemon(
        instance_id=f"{name.lower()}-instance",
        card_id=f"test-set-v1-{name.lower()}--1",
        pokemon_number=number,
        name=name,
        set_name="Test Set",
        card_number="1",
    )


@pytest.fixture
def make_pokemon():
    """Factory fixture for Pokemon builders."""
    return pokemon_builder


@pytest.fixture
def ember() -> Attack:
    """One Fire energy for a flat 30."""
    return Attack(name="Ember", energy_cost=[EnergyType.FIRE], damage="30")


@pytest.fixture
def balanced_basic(ember: Attack) -> Card:
    """Basic with expected HP, one efficient attack and retreat cost 1."""
    return (
        pokemon_builder()
        .set_pokemon_type(PokemonType.FIRE)
        .set_stage(EvolutionStage.BASIC)
        .set_hp(60)
        .set_retreat_cost(1)
        .add_attack(ember)
        .build()
    )


@pytest.fixture
def trainer_card() -> Card:
    return CardBuilder.trainer(
        instance_id="potion-instance",
        card_id="test-set-v1-potion--2",
        name="Potion",
        set_name="Test Set",
        card_number="2",
    ).build()


@pytest.fixture
def energy_card() -> Card:
    return CardBuilder.energy(
        instance_id="fire-energy-instance",
        card_id="test-set-v1-fire-energy--3",
        name="Fire Energy",
        set_name="Test Set",
        card_number="3",
    ).build()


@pytest.fixture
def clean_environment(monkeypatch):
    """Fresh settings and no cardlab handlers on the root logger."""
    for key in ("CARDLAB_LOG_LEVEL", "CARDLAB_LOG_FILE", "CARDLAB_DATA_DIR", "CARDLAB_REPORT_TOP"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    reset_settings()
