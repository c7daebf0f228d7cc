"""
Shared enumerations for card data.

These are the closed vocabularies referenced by effects, rules and cards.
Upper-case values are printed card attributes; lower-case values are
targeting and timing tokens used inside effect payloads.
"""

from enum import Enum


# =============================================================================
# Card attributes
# =============================================================================

class CardType(str, Enum):
    """Top-level card kinds."""
    POKEMON = "POKEMON"
    TRAINER = "TRAINER"
    ENERGY = "ENERGY"


class EnergyType(str, Enum):
    """Energy symbols used in attack costs and energy cards."""
    COLORLESS = "COLORLESS"
    DARKNESS = "DARKNESS"
    DRAGON = "DRAGON"
    ELECTRIC = "ELECTRIC"
    FAIRY = "FAIRY"
    FIGHTING = "FIGHTING"
    FIRE = "FIRE"
    GRASS = "GRASS"
    LIGHTNING = "LIGHTNING"
    METAL = "METAL"
    PSYCHIC = "PSYCHIC"
    WATER = "WATER"


class PokemonType(str, Enum):
    """Pokemon types (weakness, resistance and the card's own type)."""
    COLORLESS = "COLORLESS"
    DARKNESS = "DARKNESS"
    DRAGON = "DRAGON"
    ELECTRIC = "ELECTRIC"
    FAIRY = "FAIRY"
    FIGHTING = "FIGHTING"
    FIRE = "FIRE"
    GRASS = "GRASS"
    LIGHTNING = "LIGHTNING"
    METAL = "METAL"
    PSYCHIC = "PSYCHIC"
    WATER = "WATER"


class EvolutionStage(str, Enum):
    """Evolution stage printed on a Pokemon card."""
    BASIC = "BASIC"
    STAGE_1 = "STAGE_1"
    STAGE_2 = "STAGE_2"
    VMAX = "VMAX"
    VSTAR = "VSTAR"
    GX = "GX"
    EX = "EX"
    MEGA = "MEGA"
    BREAK = "BREAK"
    LEGEND = "LEGEND"


class Rarity(str, Enum):
    """Printed rarity."""
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    RARE_HOLO = "RARE_HOLO"
    HOLO_RARE = "HOLO_RARE"
    ULTRA_RARE = "ULTRA_RARE"
    SECRET_RARE = "SECRET_RARE"


class TrainerType(str, Enum):
    """Trainer card kinds."""
    ITEM = "ITEM"
    SUPPORTER = "SUPPORTER"
    STADIUM = "STADIUM"
    TOOL = "TOOL"


class StatusCondition(str, Enum):
    """Special conditions a Pokemon can be affected by."""
    PARALYZED = "PARALYZED"
    POISONED = "POISONED"
    BURNED = "BURNED"
    ASLEEP = "ASLEEP"
    CONFUSED = "CONFUSED"


# =============================================================================
# Effect payload tokens
# =============================================================================

class TargetType(str, Enum):
    """Which Pokemon an effect applies to."""
    SELF = "self"
    DEFENDING = "defending"
    BENCHED_YOURS = "benched_yours"
    BENCHED_OPPONENTS = "benched_opponents"
    ALL_YOURS = "all_yours"
    ALL_OPPONENTS = "all_opponents"
    ACTIVE_YOURS = "active_yours"
    ACTIVE_OPPONENT = "active_opponent"


class Duration(str, Enum):
    """How long a protective effect lasts."""
    NEXT_TURN = "next_turn"
    THIS_TURN = "this_turn"
    PERMANENT = "permanent"


class Selector(str, Enum):
    """Who picks the card or Pokemon an effect applies to."""
    CHOICE = "choice"
    RANDOM = "random"


class EnergySource(str, Enum):
    """Where accelerated energy comes from."""
    DECK = "deck"
    DISCARD = "discard"
    HAND = "hand"
    SELF = "self"


class Destination(str, Enum):
    """Where searched cards go."""
    HAND = "hand"
    BENCH = "bench"


# =============================================================================
# Abilities and attacks
# =============================================================================

class AbilityActivationType(str, Enum):
    """How an ability comes into effect."""
    PASSIVE = "PASSIVE"
    TRIGGERED = "TRIGGERED"
    ACTIVATED = "ACTIVATED"


class UsageLimit(str, Enum):
    """How often an activated or triggered ability can be used."""
    ONCE_PER_TURN = "ONCE_PER_TURN"
    UNLIMITED = "UNLIMITED"


class GameEventType(str, Enum):
    """Game events that fire triggered abilities."""
    WHEN_PLAYED = "WHEN_PLAYED"
    WHEN_DAMAGED = "WHEN_DAMAGED"
    WHEN_ATTACKING = "WHEN_ATTACKING"
    WHEN_DEFENDING = "WHEN_DEFENDING"
    BETWEEN_TURNS = "BETWEEN_TURNS"
    WHEN_KNOCKED_OUT = "WHEN_KNOCKED_OUT"
    START_OF_TURN = "START_OF_TURN"
    END_OF_TURN = "END_OF_TURN"


class PreconditionType(str, Enum):
    """Checks made before an attack resolves."""
    COIN_FLIP = "COIN_FLIP"
    DAMAGE_CHECK = "DAMAGE_CHECK"
    ENERGY_CHECK = "ENERGY_CHECK"
