"""Enumeration types for the medium rest library.

Covers spellcasting progressions, feature recovery periods, the bonus
options a medium rest can grant, and the policy flags that resolve
ambiguous recovery rules.
"""

from __future__ import annotations

from enum import StrEnum


class SpellcastingProgression(StrEnum):
    """How a class's levels count toward multiclass caster level (PHB p.164)."""

    NONE = "none"
    FULL = "full"
    HALF = "half"
    THIRD = "third"
    PACT = "pact"

    @property
    def divisor(self) -> int | None:
        """Levels per caster level, or None if the class does not contribute.

        Pact magic casters are excluded; they regain slots on their own.
        """
        return {
            SpellcastingProgression.FULL: 1,
            SpellcastingProgression.HALF: 2,
            SpellcastingProgression.THIRD: 3,
        }.get(self)


class RecoveryPeriod(StrEnum):
    """When a limited-use feature regains its uses."""

    SHORT_REST = "short-rest"
    LONG_REST = "long-rest"
    DAY = "day"
    DAWN = "dawn"
    DUSK = "dusk"

    @classmethod
    def from_host_code(cls, code: str) -> RecoveryPeriod | None:
        """Map a host period code (e.g. 'lr') to a recovery period.

        Args:
            code: Host period code or a full period value.

        Returns:
            The matching RecoveryPeriod, or None if the code is unknown.
        """
        aliases = {"sr": cls.SHORT_REST, "lr": cls.LONG_REST}
        if code in aliases:
            return aliases[code]
        try:
            return cls(code)
        except ValueError:
            return None


class MediumRestOption(StrEnum):
    """Bonus options a medium rest can grant. Each may be picked once."""

    HIT_DICE = "hitdice"
    SPELL_SLOTS = "arcane"
    FEATURES = "features"

    @property
    def label(self) -> str:
        """Player-facing label for the option."""
        return {
            MediumRestOption.HIT_DICE: "Recover Half Hit Dice",
            MediumRestOption.SPELL_SLOTS: "Recover Spell Slots (Arcane Recovery Style)",
            MediumRestOption.FEATURES: "Restore Long Rest Features",
        }[self]


class SlotOverflowPolicy(StrEnum):
    """Handling of a spell slot request larger than the missing count."""

    SKIP = "skip"
    REJECT = "reject"


class UnknownProgressionPolicy(StrEnum):
    """Handling of an unrecognized spellcasting progression tag."""

    RAISE = "raise"
    IGNORE = "ignore"


__all__ = [
    "SpellcastingProgression",
    "RecoveryPeriod",
    "MediumRestOption",
    "SlotOverflowPolicy",
    "UnknownProgressionPolicy",
]
