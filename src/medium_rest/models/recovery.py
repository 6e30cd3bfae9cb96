"""Recovery records produced by the calculator.

Results are constructed fresh for every validation call and never mutated.
Budget overshoot is reported through ``valid=False`` rather than raised, so
the host can re-prompt the player with the same inputs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from medium_rest.models.enums import MediumRestOption


# Field paths in the host's character data model
SPELL_SLOT_VALUE_PATH = "system.spells.spell{level}.value"
HIT_DICE_SPENT_PATH = "system.hd.spent"
FEATURE_USES_SPENT_PATH = "system.uses.spent"


# =============================================================================
# Spell Slots
# =============================================================================


class MissingSlot(BaseModel):
    """A spell level with expended slots."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=9)
    current: int = Field(ge=0)
    max: int = Field(ge=0)
    missing: int = Field(gt=0)


class SlotRecoveryResult(BaseModel):
    """Outcome of validating a spell slot recovery selection.

    Attributes:
        valid: Whether the selection fits the budget.
        total_used: Spell levels consumed by the accepted picks.
        updates: Spell level -> new absolute current slot count.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    total_used: int = Field(ge=0)
    updates: dict[int, int] = Field(default_factory=dict)

    def to_host_updates(self) -> dict[str, int]:
        """Express the updates as host field paths for a single actor update."""
        return {
            SPELL_SLOT_VALUE_PATH.format(level=level): value
            for level, value in self.updates.items()
        }


# =============================================================================
# Hit Dice
# =============================================================================


class SpentHitDice(BaseModel):
    """A class with hit dice available to recover."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: str | None = None
    denomination: str
    max: int = Field(gt=0)
    spent: int = Field(gt=0)


class HitDiceUpdate(BaseModel):
    """New spent count for one class."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: str | None = None
    new_spent: int = Field(ge=0)


class HitDiceRecoveryResult(BaseModel):
    """Outcome of validating a hit dice recovery selection.

    Attributes:
        valid: Whether the selection is acceptable.
        total_used: Dice requested across all accepted classes.
        updates: Per-class new spent counts, in input order.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    total_used: int = Field(ge=0)
    updates: list[HitDiceUpdate] = Field(default_factory=list)

    def to_host_updates(self) -> dict[str, dict[str, int]]:
        """Express the updates as per-class host payloads.

        Payloads are keyed by the class item id, or by class name when the
        host supplied no id.
        """
        return {u.id or u.name: {HIT_DICE_SPENT_PATH: u.new_spent} for u in self.updates}


# =============================================================================
# Features
# =============================================================================


class FeatureUpdate(BaseModel):
    """Restoration of one feature's uses."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    new_spent: int = Field(default=0, ge=0)


class FeatureRestoreResult(BaseModel):
    """Outcome of validating a long-rest feature restoration.

    Attributes:
        valid: Whether every requested feature can be restored.
        updates: Features to restore, in the character's feature order.
        rejected_ids: Requested ids that are not restorable.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    updates: list[FeatureUpdate] = Field(default_factory=list)
    rejected_ids: list[str] = Field(default_factory=list)

    @property
    def restored_names(self) -> list[str]:
        return [u.name for u in self.updates]

    def to_host_updates(self) -> dict[str, dict[str, int]]:
        """Express the updates as per-item host payloads keyed by feature id."""
        return {u.id: {FEATURE_USES_SPENT_PATH: u.new_spent} for u in self.updates}


# =============================================================================
# Options
# =============================================================================


class OptionSelectionResult(BaseModel):
    """Outcome of validating the medium rest options a player picked."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    choices_allowed: int = Field(ge=0)
    selected: tuple[MediumRestOption, ...] = ()


__all__ = [
    "SPELL_SLOT_VALUE_PATH",
    "HIT_DICE_SPENT_PATH",
    "FEATURE_USES_SPENT_PATH",
    "MissingSlot",
    "SlotRecoveryResult",
    "SpentHitDice",
    "HitDiceUpdate",
    "HitDiceRecoveryResult",
    "FeatureUpdate",
    "FeatureRestoreResult",
    "OptionSelectionResult",
]
