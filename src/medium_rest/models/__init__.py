"""Pydantic V2 schemas for the medium rest library.

Submodules:
    enums: Progressions, recovery periods, rest options, policy flags.
    character: Validated character data (classes, spell slots, features).
    recovery: Results and updates produced by the recovery calculator.

Example:
    >>> from medium_rest.models import ClassEntry, HitDice
    >>> fighter = ClassEntry(name="Fighter", levels=5, hit_dice=HitDice(denomination="d10", max=5))
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from medium_rest.models.enums import (
    MediumRestOption,
    RecoveryPeriod,
    SlotOverflowPolicy,
    SpellcastingProgression,
    UnknownProgressionPolicy,
)

# =============================================================================
# Character Data
# =============================================================================
from medium_rest.models.character import (
    CharacterSnapshot,
    ClassEntry,
    Feature,
    HitDice,
    SpellSlot,
    SpellSlotTable,
)

# =============================================================================
# Recovery Results
# =============================================================================
from medium_rest.models.recovery import (
    FeatureRestoreResult,
    FeatureUpdate,
    HitDiceRecoveryResult,
    HitDiceUpdate,
    MissingSlot,
    OptionSelectionResult,
    SlotRecoveryResult,
    SpentHitDice,
)


__all__ = [
    # === Enumerations ===
    "SpellcastingProgression",
    "RecoveryPeriod",
    "MediumRestOption",
    "SlotOverflowPolicy",
    "UnknownProgressionPolicy",
    # === Character Data ===
    "HitDice",
    "ClassEntry",
    "SpellSlot",
    "SpellSlotTable",
    "Feature",
    "CharacterSnapshot",
    # === Recovery Results ===
    "MissingSlot",
    "SlotRecoveryResult",
    "SpentHitDice",
    "HitDiceUpdate",
    "HitDiceRecoveryResult",
    "FeatureUpdate",
    "FeatureRestoreResult",
    "OptionSelectionResult",
]
