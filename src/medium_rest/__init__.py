"""Medium Rest - recovery rules for a D&D 5E rest between short and long.

A medium rest grants all the benefits of a short rest, resets wound clears,
and additionally grants N - 1 bonus options (N = rations consumed): half the
character's hit dice, an arcane recovery worth of spell slots, or all
charges of long-rest features.

The library computes budgets and validates the player's picks. The host
owns the character data and applies the returned updates.

Example:
    >>> from medium_rest import MediumRest, load_character
    >>>
    >>> character = load_character(actor_data)
    >>> rest = MediumRest(character, rations=3)
    >>> result = rest.recover_spell_slots({1: 2, 2: 1})
    >>> if result.valid:
    ...     actor.update(result.to_host_updates())

Modules:
    core: Configuration, logging, and exceptions.
    models: Pydantic V2 records for character data and results.
    engine: Recovery calculator and medium rest session.
    ingestion: Host actor data loading.
"""

from __future__ import annotations

# Core
from medium_rest.core.config import Settings, get_settings
from medium_rest.core.exceptions import ConfigurationError, InvalidDataError, MediumRestError
from medium_rest.core.logging import configure_logging, get_logger

# Models
from medium_rest.models import (
    CharacterSnapshot,
    ClassEntry,
    Feature,
    HitDice,
    MediumRestOption,
    RecoveryPeriod,
    SlotOverflowPolicy,
    SpellSlot,
    SpellSlotTable,
    SpellcastingProgression,
    UnknownProgressionPolicy,
)

# Engine
from medium_rest.engine import (
    MediumRest,
    MediumRestSummary,
    caster_level,
    choices_allowed,
    has_restorable_features,
    hit_dice_budget,
    long_rest_features,
    missing_slots,
    recovery_budget,
    restorable_features,
    spent_hit_dice,
    total_max_hit_dice,
    validate_hit_dice_recovery,
    validate_slot_recovery,
)

# Ingestion
from medium_rest.ingestion import find_counter_id, load_character


__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "MediumRestError",
    "InvalidDataError",
    "ConfigurationError",
    "configure_logging",
    "get_logger",
    # Models
    "CharacterSnapshot",
    "ClassEntry",
    "Feature",
    "HitDice",
    "SpellSlot",
    "SpellSlotTable",
    "MediumRestOption",
    "RecoveryPeriod",
    "SlotOverflowPolicy",
    "SpellcastingProgression",
    "UnknownProgressionPolicy",
    # Engine
    "MediumRest",
    "MediumRestSummary",
    "choices_allowed",
    "caster_level",
    "recovery_budget",
    "missing_slots",
    "validate_slot_recovery",
    "hit_dice_budget",
    "total_max_hit_dice",
    "spent_hit_dice",
    "validate_hit_dice_recovery",
    "long_rest_features",
    "restorable_features",
    "has_restorable_features",
    # Ingestion
    "load_character",
    "find_counter_id",
]
