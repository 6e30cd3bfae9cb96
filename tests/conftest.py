"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the medium rest test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from medium_rest.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "MEDIUM_REST_DEBUG": "true",
        "MEDIUM_REST_LOG_LEVEL": "DEBUG",
        "MEDIUM_REST_RECOVERY_SLOT_OVERFLOW": "reject",
        "MEDIUM_REST_RECOVERY_UNKNOWN_PROGRESSION": "ignore",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def wizard_class() -> Any:
    """Wizard 5 with three of five hit dice spent."""
    from medium_rest.models import ClassEntry, HitDice

    return ClassEntry(
        name="Wizard",
        levels=5,
        spellcasting_progression="full",
        hit_dice=HitDice(denomination="d6", max=5, spent=3),
    )


@pytest.fixture
def paladin_class() -> Any:
    """Paladin 4 with all hit dice spent."""
    from medium_rest.models import ClassEntry, HitDice

    return ClassEntry(
        name="Paladin",
        levels=4,
        spellcasting_progression="half",
        hit_dice=HitDice(denomination="d10", max=4, spent=4),
    )


@pytest.fixture
def fighter_class() -> Any:
    """Fighter 5 with no spellcasting and no spent hit dice."""
    from medium_rest.models import ClassEntry, HitDice

    return ClassEntry(
        name="Fighter",
        levels=5,
        hit_dice=HitDice(denomination="d10", max=5, spent=0),
    )


@pytest.fixture
def sample_spell_slots() -> Any:
    """Spell slots for a wizard 5 / paladin 4 after a hard fight."""
    from medium_rest.models import SpellSlot, SpellSlotTable

    return SpellSlotTable(
        slots={
            1: SpellSlot(current=2, max=4),
            2: SpellSlot(current=1, max=3),
            3: SpellSlot(current=0, max=3),
            4: SpellSlot(current=1, max=1),
        }
    )


@pytest.fixture
def sample_features() -> list[Any]:
    """A mix of short-rest, long-rest and unlimited features."""
    from medium_rest.models import Feature, RecoveryPeriod

    return [
        Feature(
            id="feat-indomitable",
            name="Indomitable",
            uses_max=1,
            uses_spent=1,
            recovery_periods=frozenset({RecoveryPeriod.LONG_REST}),
            item_type="class",
        ),
        Feature(
            id="feat-second-wind",
            name="Second Wind",
            uses_max=1,
            uses_spent=1,
            recovery_periods=frozenset({RecoveryPeriod.SHORT_REST}),
            item_type="class",
        ),
        Feature(
            id="feat-divine-sense",
            name="Divine Sense",
            uses_max=4,
            uses_spent=0,
            recovery_periods=frozenset({RecoveryPeriod.LONG_REST}),
            item_type="class",
        ),
        Feature(
            id="feat-lay-on-hands",
            name="Lay on Hands",
            uses_max=20,
            uses_spent=15,
            recovery_periods=frozenset({RecoveryPeriod.SHORT_REST, RecoveryPeriod.LONG_REST}),
            item_type="class",
        ),
    ]


@pytest.fixture
def sample_character(
    wizard_class: Any,
    paladin_class: Any,
    sample_spell_slots: Any,
    sample_features: list[Any],
) -> Any:
    """Create a multiclass wizard 5 / paladin 4 snapshot.

    Caster level 7, slot budget 4, hit dice pool 9 (budget 4).
    """
    from medium_rest.models import CharacterSnapshot

    return CharacterSnapshot(
        name="Elara",
        classes=[wizard_class, paladin_class],
        spell_slots=sample_spell_slots,
        features=sample_features,
        proficiency_bonus=4,
    )


# =============================================================================
# Host Data Fixtures
# =============================================================================


@pytest.fixture
def sample_actor_data() -> dict[str, Any]:
    """Host actor data for a sorcerer 3 / warlock 2.

    Returns:
        Dictionary shaped like the host's actor export.
    """
    return {
        "name": "Vex",
        "system": {
            "attributes": {"prof": 2},
            "spells": {
                "spell1": {"value": 1, "max": 4},
                "spell2": {"value": 0, "max": 2},
                "spell3": {"value": 0, "max": 0},
            },
        },
        "items": [
            {
                "_id": "cls-sorc",
                "name": "Sorcerer",
                "type": "class",
                "system": {
                    "levels": 3,
                    "spellcasting": {"progression": "full"},
                    "hd": {"denomination": "d6", "max": 3, "spent": 2},
                },
            },
            {
                "_id": "cls-lock",
                "name": "Warlock",
                "type": "class",
                "system": {
                    "levels": 2,
                    "spellcasting": {"progression": "pact"},
                    "hd": {"denomination": "d8", "max": 2, "spent": 1},
                },
            },
            {
                "_id": "feat-font",
                "name": "Font of Magic",
                "type": "feat",
                "system": {
                    "type": {"value": "class"},
                    "uses": {"max": 3, "spent": 2, "recovery": [{"period": "lr"}]},
                },
            },
            {
                "_id": "feat-hex",
                "name": "Hexblade's Curse",
                "type": "feat",
                "system": {
                    "type": {"value": "class"},
                    "uses": {"max": 1, "spent": 1, "recovery": [{"period": "sr"}]},
                },
            },
            {
                "_id": "weapon-dagger",
                "name": "Dagger",
                "type": "weapon",
                "system": {},
            },
        ],
    }
