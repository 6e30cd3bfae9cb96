"""Character data records consumed by the recovery calculator.

These models are the validated boundary between the host's character data
and the pure recovery functions. They are frozen: the calculator proposes
updates and the host applies them.

Example:
    >>> wizard = ClassEntry(
    ...     name="Wizard",
    ...     levels=5,
    ...     spellcasting_progression="full",
    ...     hit_dice=HitDice(denomination="d6", max=5, spent=3),
    ... )
    >>> slots = SpellSlotTable(slots={1: SpellSlot(current=1, max=4)})
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from medium_rest.core.constants import MAX_SPELL_LEVEL, MIN_SPELL_LEVEL
from medium_rest.models.enums import RecoveryPeriod


NonNegativeInt = Annotated[int, Field(ge=0)]


# =============================================================================
# Classes & Hit Dice
# =============================================================================


class HitDice(BaseModel):
    """Hit dice pool for a single class.

    Attributes:
        denomination: Die size, e.g. 'd8'.
        max: Hit dice granted by this class (one per level).
        spent: Hit dice already spent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    denomination: str = Field(
        pattern=r"^d\d+$",
        description="Hit die size (e.g. 'd6', 'd10')",
    )
    max: NonNegativeInt = Field(description="Maximum hit dice for this class")
    spent: NonNegativeInt = Field(default=0, description="Hit dice currently spent")

    @model_validator(mode="after")
    def validate_spent(self) -> HitDice:
        """Ensure spent dice never exceed the pool."""
        if self.spent > self.max:
            msg = f"spent hit dice ({self.spent}) exceed max ({self.max})"
            raise ValueError(msg)
        return self

    @property
    def available(self) -> int:
        """Hit dice still available to spend."""
        return self.max - self.spent


class ClassEntry(BaseModel):
    """One class on a character's sheet.

    The spellcasting progression is kept as the host's raw tag so that
    caster level calculation can apply the configured policy to tags it
    does not recognize.

    Attributes:
        name: Class name, unique within a character.
        id: Host item identifier, if the host supplied one.
        levels: Levels taken in this class.
        spellcasting_progression: 'none', 'full', 'half', 'third', 'pact' or None.
        hit_dice: Hit dice pool, if the host supplied one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100, description="Class name")
    id: str | None = Field(default=None, description="Host item identifier")
    levels: NonNegativeInt = Field(default=1, description="Levels in this class")
    spellcasting_progression: str | None = Field(
        default=None,
        description="Spellcasting progression tag",
    )
    hit_dice: HitDice | None = Field(default=None, description="Hit dice pool")


# =============================================================================
# Spell Slots
# =============================================================================


class SpellSlot(BaseModel):
    """Current and maximum slots for one spell level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=0, description="Slots remaining")
    max: NonNegativeInt = Field(default=0, description="Slots at full rest")

    @model_validator(mode="after")
    def validate_current(self) -> SpellSlot:
        """Ensure remaining slots never exceed the maximum."""
        if self.current > self.max:
            msg = f"current slots ({self.current}) exceed max ({self.max})"
            raise ValueError(msg)
        return self

    @property
    def missing(self) -> int:
        """Slots expended since the last full recovery."""
        return self.max - self.current


class SpellSlotTable(BaseModel):
    """Spell slots keyed by spell level (1-9). Absent levels have no slots."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    slots: dict[int, SpellSlot] = Field(default_factory=dict)

    @field_validator("slots", mode="after")
    @classmethod
    def validate_levels(cls, value: dict[int, SpellSlot]) -> dict[int, SpellSlot]:
        """Reject keys that are not spell levels."""
        for level in value:
            if not MIN_SPELL_LEVEL <= level <= MAX_SPELL_LEVEL:
                msg = f"spell level must be between {MIN_SPELL_LEVEL} and {MAX_SPELL_LEVEL}, got {level}"
                raise ValueError(msg)
        return value

    def get(self, level: int) -> SpellSlot | None:
        """Get the slot record for a spell level."""
        return self.slots.get(level)


# =============================================================================
# Features
# =============================================================================


class Feature(BaseModel):
    """A limited-use character feature (e.g. Indomitable, Sorcery Points).

    Attributes:
        id: Host identifier of the feature.
        name: Display name.
        uses_max: Uses available after a full recovery.
        uses_spent: Uses already expended.
        recovery_periods: When the feature regains its uses.
        item_type: Host category shown next to the name (e.g. 'feat').
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Host identifier")
    name: str = Field(min_length=1, description="Feature name")
    uses_max: NonNegativeInt = Field(default=0, description="Maximum uses")
    uses_spent: NonNegativeInt = Field(default=0, description="Uses expended")
    recovery_periods: frozenset[RecoveryPeriod] = Field(
        default_factory=frozenset,
        description="Recovery periods",
    )
    item_type: str | None = Field(default=None, description="Display category")

    @field_validator("recovery_periods", mode="before")
    @classmethod
    def normalize_periods(cls, value: Any) -> Any:
        """Accept host period codes ('sr', 'lr') alongside full values."""
        if isinstance(value, (list, tuple, set, frozenset)):
            normalized = []
            for period in value:
                if isinstance(period, str):
                    mapped = RecoveryPeriod.from_host_code(period)
                    if mapped is None:
                        msg = f"unknown recovery period {period!r}"
                        raise ValueError(msg)
                    normalized.append(mapped)
                else:
                    normalized.append(period)
            return frozenset(normalized)
        return value

    @model_validator(mode="after")
    def validate_uses(self) -> Feature:
        """Ensure spent uses never exceed the maximum."""
        if self.uses_spent > self.uses_max:
            msg = f"spent uses ({self.uses_spent}) exceed max ({self.uses_max})"
            raise ValueError(msg)
        return self

    @property
    def uses_available(self) -> int:
        """Uses remaining before the next recovery."""
        return self.uses_max - self.uses_spent


# =============================================================================
# Character Snapshot
# =============================================================================


class CharacterSnapshot(BaseModel):
    """Everything the recovery calculator needs to know about one character.

    Attributes:
        name: Character name.
        classes: Class entries (multiclassing supported).
        spell_slots: Spell slot table.
        features: Limited-use features.
        proficiency_bonus: Current proficiency bonus.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="Unknown Character", description="Character name")
    classes: list[ClassEntry] = Field(default_factory=list)
    spell_slots: SpellSlotTable = Field(default_factory=SpellSlotTable)
    features: list[Feature] = Field(default_factory=list)
    proficiency_bonus: NonNegativeInt = Field(default=2, description="Proficiency bonus")

    @field_validator("classes", mode="after")
    @classmethod
    def validate_unique_classes(cls, value: list[ClassEntry]) -> list[ClassEntry]:
        """Class names key hit dice selections, so they must be unique."""
        seen: set[str] = set()
        for entry in value:
            if entry.name in seen:
                msg = f"duplicate class name {entry.name!r}"
                raise ValueError(msg)
            seen.add(entry.name)
        return value

    @property
    def total_level(self) -> int:
        return sum(c.levels for c in self.classes)

    @property
    def total_max_hit_dice(self) -> int:
        """Hit dice pool across every class that reports one."""
        return sum(c.hit_dice.max for c in self.classes if c.hit_dice is not None)


__all__ = [
    "HitDice",
    "ClassEntry",
    "SpellSlot",
    "SpellSlotTable",
    "Feature",
    "CharacterSnapshot",
]
