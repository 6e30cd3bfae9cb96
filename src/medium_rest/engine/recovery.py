"""Recovery calculator for medium rests.

Pure functions that compute how much a character may recover and validate
a player's proposed allocation against that budget. Nothing here mutates
its inputs or touches host state; results carry the updates for the host
to apply.

Rules references (PHB 2014):
- Arcane Recovery: slots with a combined level up to half the caster
  level (rounded up), none of them 6th level or higher.
- Long rest hit dice: up to half the character's total hit dice
  (minimum of one die), rounded down.
- Multiclass caster level (PHB p.164): full levels, half of half-caster
  levels and a third of third-caster levels, rounded down per class.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from medium_rest.core.config import get_settings
from medium_rest.core.constants import (
    FREE_RATIONS,
    MAX_RECOVERY_SLOT_LEVEL,
    MIN_HIT_DICE_RECOVERY,
    MIN_SPELL_LEVEL,
)
from medium_rest.core.exceptions import InvalidDataError
from medium_rest.core.logging import get_logger
from medium_rest.models.character import ClassEntry, Feature, SpellSlotTable
from medium_rest.models.enums import (
    RecoveryPeriod,
    SlotOverflowPolicy,
    SpellcastingProgression,
    UnknownProgressionPolicy,
)
from medium_rest.models.recovery import (
    HitDiceRecoveryResult,
    HitDiceUpdate,
    MissingSlot,
    SlotRecoveryResult,
    SpentHitDice,
)


logger = get_logger(__name__)


# =============================================================================
# Choices
# =============================================================================


def choices_allowed(rations_consumed: int) -> int:
    """Number of bonus medium rest options earned by eating rations.

    The first ration only covers the rest itself; each further ration
    grants one option.

    Args:
        rations_consumed: Rations eaten today.

    Returns:
        Bonus options allowed, never negative.

    Raises:
        InvalidDataError: If rations_consumed is negative.

    Example:
        >>> choices_allowed(3)
        2
    """
    if rations_consumed < 0:
        raise InvalidDataError(
            "Rations consumed cannot be negative",
            field_name="rations_consumed",
            invalid_value=rations_consumed,
        )
    return max(rations_consumed - FREE_RATIONS, 0)


# =============================================================================
# Spell Slots
# =============================================================================


def caster_level(
    classes: Sequence[ClassEntry],
    *,
    unknown_progression: UnknownProgressionPolicy | None = None,
) -> int:
    """Effective caster level across all of a character's classes.

    Pact magic and non-casting classes contribute nothing.

    Args:
        classes: The character's class entries.
        unknown_progression: Policy for unrecognized progression tags.
            Defaults to the configured policy.

    Returns:
        Total effective caster level.

    Raises:
        InvalidDataError: If a progression tag is unrecognized and the
            policy is RAISE.

    Example:
        >>> caster_level([
        ...     ClassEntry(name="Wizard", levels=5, spellcasting_progression="full"),
        ...     ClassEntry(name="Paladin", levels=4, spellcasting_progression="half"),
        ... ])
        7
    """
    if unknown_progression is None:
        unknown_progression = get_settings().recovery.unknown_progression

    total = 0
    for cls in classes:
        tag = cls.spellcasting_progression
        if not tag:
            continue
        try:
            progression = SpellcastingProgression(tag)
        except ValueError:
            if unknown_progression == UnknownProgressionPolicy.RAISE:
                raise InvalidDataError(
                    f'Unknown spellcasting progression "{tag}" on class "{cls.name}"',
                    field_name="spellcasting_progression",
                    class_name=cls.name,
                    invalid_value=tag,
                ) from None
            logger.warning(
                "Ignoring unknown spellcasting progression",
                class_name=cls.name,
                progression=tag,
            )
            continue

        divisor = progression.divisor
        if divisor is not None:
            total += cls.levels // divisor

    logger.debug("Caster level computed", caster_level=total, classes=len(classes))
    return total


def recovery_budget(caster_level: int) -> int:
    """Total spell levels recoverable with one Arcane Recovery.

    Args:
        caster_level: Effective caster level.

    Returns:
        Half the caster level, rounded up.
    """
    return (caster_level + 1) // 2


def missing_slots(
    table: SpellSlotTable,
    max_level: int = MAX_RECOVERY_SLOT_LEVEL,
) -> list[MissingSlot]:
    """Spell levels with expended slots, lowest level first.

    Args:
        table: The character's spell slot table.
        max_level: Highest spell level to consider. Never above
            MAX_RECOVERY_SLOT_LEVEL.

    Returns:
        Missing slot records in ascending level order.
    """
    result: list[MissingSlot] = []
    for level in range(MIN_SPELL_LEVEL, min(max_level, MAX_RECOVERY_SLOT_LEVEL) + 1):
        slot = table.get(level)
        if slot is None or not slot.max:
            continue
        if slot.missing > 0:
            result.append(
                MissingSlot(level=level, current=slot.current, max=slot.max, missing=slot.missing)
            )
    return result


def validate_slot_recovery(
    levels: Sequence[MissingSlot],
    selections: Mapping[int, int],
    budget: int,
    *,
    overflow: SlotOverflowPolicy | None = None,
) -> SlotRecoveryResult:
    """Check a spell slot recovery selection against the budget.

    Each restored slot costs its spell level. Levels not present in
    ``levels`` and levels above MAX_RECOVERY_SLOT_LEVEL cannot be targeted.

    Args:
        levels: Eligible levels, as returned by missing_slots.
        selections: Spell level -> number of slots to restore.
        budget: Spell levels available to spend.
        overflow: Policy for a request larger than the missing count.
            SKIP ignores that level; REJECT invalidates the selection.
            Defaults to the configured policy.

    Returns:
        The validation result with new absolute slot counts.
    """
    if overflow is None:
        overflow = get_settings().recovery.slot_overflow

    total_used = 0
    updates: dict[int, int] = {}

    for slot in levels:
        requested = selections.get(slot.level, 0)
        if requested <= 0:
            continue
        if slot.level > MAX_RECOVERY_SLOT_LEVEL:
            logger.warning("Ignoring slot above recovery ceiling", level=slot.level)
            continue
        if requested > slot.missing:
            if overflow == SlotOverflowPolicy.REJECT:
                logger.debug(
                    "Slot request exceeds missing slots",
                    level=slot.level,
                    requested=requested,
                    missing=slot.missing,
                )
                return SlotRecoveryResult(valid=False, total_used=total_used, updates=updates)
            logger.warning(
                "Skipping slot request larger than missing slots",
                level=slot.level,
                requested=requested,
                missing=slot.missing,
            )
            continue
        total_used += requested * slot.level
        updates[slot.level] = slot.current + requested

    return SlotRecoveryResult(valid=total_used <= budget, total_used=total_used, updates=updates)


# =============================================================================
# Hit Dice
# =============================================================================


def hit_dice_budget(total_max_hit_dice: int) -> int:
    """Hit dice recoverable from the character's whole pool.

    Always computed on the total across classes. Rounding per class and
    summing over-recovers for multiclass characters.

    Args:
        total_max_hit_dice: Sum of max hit dice across all classes.

    Returns:
        Half the pool rounded down, at least one die.

    Example:
        >>> hit_dice_budget(9)
        4
    """
    return max(total_max_hit_dice // 2, MIN_HIT_DICE_RECOVERY)


def _require_hit_dice(classes: Sequence[ClassEntry]) -> None:
    if not classes:
        raise InvalidDataError("No classes provided", field_name="classes")
    for cls in classes:
        if cls.hit_dice is None:
            raise InvalidDataError(
                f'Class "{cls.name}" is missing hit dice data',
                field_name="hit_dice",
                class_name=cls.name,
            )


def total_max_hit_dice(classes: Sequence[ClassEntry]) -> int:
    """Sum of max hit dice across all classes.

    Raises:
        InvalidDataError: If there are no classes or one lacks hit dice data.
    """
    _require_hit_dice(classes)
    return sum(cls.hit_dice.max for cls in classes)


def spent_hit_dice(classes: Sequence[ClassEntry]) -> list[SpentHitDice]:
    """Classes that have spent hit dice to recover, in input order.

    Args:
        classes: The character's class entries.

    Returns:
        One record per class with at least one spent die.

    Raises:
        InvalidDataError: If there are no classes or one lacks hit dice data.
    """
    _require_hit_dice(classes)

    result: list[SpentHitDice] = []
    for cls in classes:
        hd = cls.hit_dice
        if not hd.max or not hd.spent:
            continue
        result.append(
            SpentHitDice(
                name=cls.name,
                id=cls.id,
                denomination=hd.denomination,
                max=hd.max,
                spent=hd.spent,
            )
        )
    return result


def validate_hit_dice_recovery(
    entries: Sequence[SpentHitDice],
    selections: Mapping[str, int],
    budget: int,
) -> HitDiceRecoveryResult:
    """Check a hit dice recovery selection against the budget.

    Every die costs one unit regardless of its size. Asking a class for
    more dice than it has spent invalidates the whole selection at once.

    Args:
        entries: Classes with spent dice, as returned by spent_hit_dice.
        selections: Class name -> number of dice to recover.
        budget: Dice available to recover.

    Returns:
        The validation result with new spent counts per class.
    """
    total_used = 0
    updates: list[HitDiceUpdate] = []

    for entry in entries:
        requested = selections.get(entry.name, 0)
        if requested <= 0:
            continue
        if requested > entry.spent:
            logger.debug(
                "Hit dice request exceeds spent dice",
                class_name=entry.name,
                requested=requested,
                spent=entry.spent,
            )
            return HitDiceRecoveryResult(valid=False, total_used=total_used, updates=updates)
        total_used += requested
        updates.append(HitDiceUpdate(name=entry.name, id=entry.id, new_spent=entry.spent - requested))

    return HitDiceRecoveryResult(valid=total_used <= budget, total_used=total_used, updates=updates)


# =============================================================================
# Long-Rest Features
# =============================================================================


def long_rest_features(features: Sequence[Feature]) -> list[Feature]:
    """Features with limited uses that recover on a long rest."""
    return [
        f for f in features
        if f.uses_max > 0 and RecoveryPeriod.LONG_REST in f.recovery_periods
    ]


def restorable_features(features: Sequence[Feature]) -> list[Feature]:
    """Long-rest features that currently have spent uses."""
    return [f for f in long_rest_features(features) if f.uses_spent > 0]


def has_restorable_features(features: Sequence[Feature]) -> bool:
    """Whether restoring long-rest features would change anything."""
    return bool(restorable_features(features))


__all__ = [
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
]
