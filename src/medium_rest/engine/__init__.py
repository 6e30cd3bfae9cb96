"""Recovery engine for medium rests.

Submodules:
    recovery: Pure budget and validation functions.
    medium_rest: Session object tying the budgets to one character.
"""

from __future__ import annotations

from medium_rest.engine.medium_rest import MediumRest, MediumRestSummary
from medium_rest.engine.recovery import (
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


__all__ = [
    # Recovery calculator
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
    # Session
    "MediumRest",
    "MediumRestSummary",
]
