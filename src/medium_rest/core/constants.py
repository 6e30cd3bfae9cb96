"""D&D 5E rules constants used by the recovery calculator.

Values follow the 2014 Player's Handbook.
"""

from __future__ import annotations

# =============================================================================
# Spell Slots
# =============================================================================

MIN_SPELL_LEVEL = 1
"""Lowest spell level that uses a spell slot (cantrips do not)."""

MAX_SPELL_LEVEL = 9
"""Highest spell level in D&D 5E."""

MAX_RECOVERY_SLOT_LEVEL = 5
"""Highest slot level recoverable via Arcane Recovery ("none of the slots
can be 6th level or higher")."""

# =============================================================================
# Hit Dice
# =============================================================================

MIN_HIT_DICE_RECOVERY = 1
"""Minimum number of hit dice regained when recovering half the pool."""

# =============================================================================
# Medium Rest
# =============================================================================

FREE_RATIONS = 1
"""Rations consumed before any bonus medium rest option is granted."""

DEFAULT_WOUND_CLEARS_LABEL = "Wound Clears"
"""Label of the host counter reset by a medium rest."""


__all__ = [
    "MIN_SPELL_LEVEL",
    "MAX_SPELL_LEVEL",
    "MAX_RECOVERY_SLOT_LEVEL",
    "MIN_HIT_DICE_RECOVERY",
    "FREE_RATIONS",
    "DEFAULT_WOUND_CLEARS_LABEL",
]
