"""Medium rest session logic.

A medium rest grants all the benefits of a short rest, resets the wound
clears counter, and additionally grants N - 1 of the options below, where
N is the number of rations consumed that day:

- Half your hit dice
- An "arcane recovery" worth of spell slots (using total caster level)
- All charges of your long-rest class features, except spell slots

Each option can be picked once per medium rest. The host applies the short
rest itself, collects the player's picks and applies the updates returned
here; MediumRest decides what is allowed and remembers which options were
picked and which of them have been used.

Example:
    >>> rest = MediumRest(character, rations=3)
    >>> rest.choices_allowed
    2
    >>> rest.select_options([MediumRestOption.HIT_DICE]).valid
    True
    >>> result = rest.recover_hit_dice({"Fighter": 2})
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from medium_rest.core.config import Settings, get_settings
from medium_rest.core.exceptions import InvalidDataError
from medium_rest.core.logging import get_logger
from medium_rest.engine.recovery import (
    caster_level,
    choices_allowed,
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
from medium_rest.models.character import CharacterSnapshot, Feature
from medium_rest.models.enums import MediumRestOption
from medium_rest.models.recovery import (
    FeatureRestoreResult,
    FeatureUpdate,
    HitDiceRecoveryResult,
    MissingSlot,
    OptionSelectionResult,
    SlotRecoveryResult,
    SpentHitDice,
)


logger = get_logger(__name__)


@dataclass
class MediumRestSummary:
    """Collects what a medium rest did for the closing notification.

    Attributes:
        short_rest_only: True when no bonus options were granted.
        parts: Summary fragments in the order they happened.
    """

    short_rest_only: bool = False
    parts: list[str] = field(default_factory=list)

    def add(self, part: str | None) -> None:
        """Append a fragment, ignoring empty ones."""
        if part:
            self.parts.append(part)

    @property
    def message(self) -> str:
        """Final message shown to the player."""
        prefix = "Medium Rest complete (Short Rest only)" if self.short_rest_only else "Medium Rest complete"
        if self.parts:
            return f"{prefix}: {', '.join(self.parts)}"
        return f"{prefix}."


class MediumRest:
    """A single medium rest for one character.

    Wraps a character snapshot and the rations consumed, exposing the
    budgets for each option and validating the player's picks. Budgets
    depend only on the snapshot. Recoveries are stateful: each one needs
    its option in the accepted selection and succeeds at most once, and
    accepted recoveries are recorded on ``summary``.
    """

    def __init__(
        self,
        character: CharacterSnapshot,
        rations: int,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the medium rest.

        Args:
            character: Validated character data.
            rations: Rations consumed today.
            settings: Settings to use instead of the global ones.

        Raises:
            InvalidDataError: If rations is negative.
        """
        self.character = character
        self.rations = rations
        self._settings = settings or get_settings()
        self._choices_allowed = choices_allowed(rations)
        self.summary = MediumRestSummary(short_rest_only=self._choices_allowed <= 0)
        self._selection: OptionSelectionResult | None = None
        self._applied: set[MediumRestOption] = set()
        self._wound_clears_done = False
        logger.info(
            "Medium rest started",
            character=character.name,
            rations=rations,
            choices_allowed=self._choices_allowed,
        )

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    @property
    def choices_allowed(self) -> int:
        return self._choices_allowed

    @property
    def is_short_rest_only(self) -> bool:
        return self._choices_allowed <= 0

    @property
    def caster_level(self) -> int:
        return caster_level(
            self.character.classes,
            unknown_progression=self._settings.recovery.unknown_progression,
        )

    @property
    def slot_budget(self) -> int:
        return recovery_budget(self.caster_level)

    @property
    def missing_slots(self) -> list[MissingSlot]:
        return missing_slots(
            self.character.spell_slots,
            self._settings.recovery.max_recovery_slot_level,
        )

    @property
    def hit_dice_budget(self) -> int:
        return hit_dice_budget(total_max_hit_dice(self.character.classes))

    @property
    def spent_hit_dice(self) -> list[SpentHitDice]:
        return spent_hit_dice(self.character.classes)

    @property
    def long_rest_features(self) -> list[Feature]:
        return long_rest_features(self.character.features)

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def available_options(self) -> list[MediumRestOption]:
        """Options that would actually recover something for this character.

        Returns:
            Offerable options in canonical order.
        """
        options: list[MediumRestOption] = []
        if self.character.classes and all(c.hit_dice is not None for c in self.character.classes):
            if self.spent_hit_dice:
                options.append(MediumRestOption.HIT_DICE)
        if self.caster_level > 0 and self.missing_slots:
            options.append(MediumRestOption.SPELL_SLOTS)
        if restorable_features(self.character.features):
            options.append(MediumRestOption.FEATURES)
        return options

    @property
    def selected_options(self) -> tuple[MediumRestOption, ...]:
        """Options in the accepted selection, empty until one is accepted."""
        return self._selection.selected if self._selection is not None else ()

    @property
    def applied_options(self) -> frozenset[MediumRestOption]:
        """Selected options whose recovery has already been accepted."""
        return frozenset(self._applied)

    def select_options(
        self,
        options: Iterable[MediumRestOption | str] | MediumRestOption | str,
    ) -> OptionSelectionResult:
        """Validate the options a player picked.

        Picking the same option twice counts once. A valid selection is
        kept and unlocks the matching recoveries; it can be replaced until
        the first recovery is applied.

        Args:
            options: Picked options (enum members or their values). A
                single option may be passed on its own.

        Returns:
            The selection result; invalid when more options were picked
            than the rations allow.

        Raises:
            InvalidDataError: If an option is unknown or a recovery has
                already been applied.
        """
        if self._applied:
            raise InvalidDataError(
                "Medium rest options cannot change after a recovery was applied",
                field_name="options",
                details={"applied": sorted(o.value for o in self._applied)},
            )
        if isinstance(options, str):
            options = [options]

        selected: list[MediumRestOption] = []
        for option in options:
            try:
                member = MediumRestOption(option)
            except ValueError:
                raise InvalidDataError(
                    f"Unknown medium rest option {option!r}",
                    field_name="options",
                    invalid_value=option,
                ) from None
            if member not in selected:
                selected.append(member)

        result = OptionSelectionResult(
            valid=len(selected) <= self._choices_allowed,
            choices_allowed=self._choices_allowed,
            selected=tuple(selected),
        )
        if result.valid:
            self._selection = result
        else:
            logger.info(
                "Too many medium rest options picked",
                picked=len(selected),
                choices_allowed=self._choices_allowed,
            )
        return result

    def _require_option(self, option: MediumRestOption) -> None:
        if option not in self.selected_options:
            raise InvalidDataError(
                f'Medium rest option "{option.value}" was not selected',
                field_name="options",
                invalid_value=option.value,
            )
        if option in self._applied:
            raise InvalidDataError(
                f'Medium rest option "{option.value}" was already applied',
                field_name="options",
                invalid_value=option.value,
            )

    # -------------------------------------------------------------------------
    # Recovery
    # -------------------------------------------------------------------------

    def recover_spell_slots(self, selections: Mapping[int, int]) -> SlotRecoveryResult:
        """Validate an arcane-recovery style spell slot selection.

        Args:
            selections: Spell level -> slots to restore.

        Returns:
            The validation result. When valid, the option is used up and
            its summary is recorded.

        Raises:
            InvalidDataError: If spell slots were not selected or were
                already recovered.
        """
        self._require_option(MediumRestOption.SPELL_SLOTS)
        budget = self.slot_budget
        result = validate_slot_recovery(
            self.missing_slots,
            selections,
            budget,
            overflow=self._settings.recovery.slot_overflow,
        )
        logger.info(
            "Spell slot recovery validated",
            character=self.character.name,
            valid=result.valid,
            total_used=result.total_used,
            budget=budget,
        )
        if result.valid:
            self._applied.add(MediumRestOption.SPELL_SLOTS)
            if result.total_used > 0:
                self.summary.add(f"Restored {result.total_used} spell slot levels")
        return result

    def recover_hit_dice(self, selections: Mapping[str, int]) -> HitDiceRecoveryResult:
        """Validate a hit dice recovery selection.

        Args:
            selections: Class name -> dice to recover.

        Returns:
            The validation result. When valid, the option is used up and
            its summary is recorded.

        Raises:
            InvalidDataError: If hit dice were not selected or were already
                recovered, or if the character has no classes or a class
                lacks hit dice data.
        """
        self._require_option(MediumRestOption.HIT_DICE)
        budget = self.hit_dice_budget
        result = validate_hit_dice_recovery(self.spent_hit_dice, selections, budget)
        logger.info(
            "Hit dice recovery validated",
            character=self.character.name,
            valid=result.valid,
            total_used=result.total_used,
            budget=budget,
        )
        if result.valid:
            self._applied.add(MediumRestOption.HIT_DICE)
            if result.total_used > 0:
                self.summary.add(f"Recovered {result.total_used} hit dice")
        return result

    def restore_features(self, feature_ids: Iterable[str]) -> FeatureRestoreResult:
        """Validate which long-rest features to restore.

        Args:
            feature_ids: Ids of the features the player picked.

        Returns:
            The restore result. Invalid if any id is not a long-rest
            feature with spent uses, in which case nothing is restored.

        Raises:
            InvalidDataError: If features were not selected or were already
                restored.
        """
        self._require_option(MediumRestOption.FEATURES)
        requested = set(feature_ids)
        restorable = {f.id: f for f in restorable_features(self.character.features)}
        rejected = sorted(requested - restorable.keys())

        if rejected:
            logger.info("Feature restore rejected", character=self.character.name, rejected=rejected)
            return FeatureRestoreResult(valid=False, rejected_ids=rejected)

        updates = [
            FeatureUpdate(id=f.id, name=f.name, new_spent=0)
            for f in self.character.features
            if f.id in requested
        ]
        result = FeatureRestoreResult(valid=True, updates=updates)
        logger.info(
            "Features restored",
            character=self.character.name,
            features=result.restored_names,
        )
        self._applied.add(MediumRestOption.FEATURES)
        if updates:
            self.summary.add(f"Restored {', '.join(result.restored_names)}")
        return result

    def wound_clears_reset(self) -> int:
        """Value the wound clears counter resets to (the proficiency bonus).

        Part of every medium rest; no option is needed. The summary line
        is recorded once however often this is called.
        """
        if not self._wound_clears_done:
            self._wound_clears_done = True
            self.summary.add("Wound clears reset")
        return self.character.proficiency_bonus


__all__ = [
    "MediumRest",
    "MediumRestSummary",
]
