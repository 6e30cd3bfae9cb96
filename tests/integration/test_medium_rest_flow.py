"""Integration tests for a complete medium rest.

These tests load host actor data, run a medium rest through every option
and check the update payloads handed back to the host.
"""

from __future__ import annotations

from typing import Any

import pytest

from medium_rest import MediumRest, load_character
from medium_rest.core.exceptions import InvalidDataError
from medium_rest.models import MediumRestOption


class TestMediumRestFlow:
    """End-to-end medium rest for a sorcerer 3 / warlock 2."""

    @pytest.fixture
    def rest(self, sample_actor_data: dict[str, Any]) -> MediumRest:
        """Medium rest with four rations eaten (three options)."""
        return MediumRest(load_character(sample_actor_data), rations=4)

    def test_budgets(self, rest: MediumRest) -> None:
        """Test budgets derived from the host data."""
        assert rest.choices_allowed == 3
        assert rest.caster_level == 3
        assert rest.slot_budget == 2
        assert rest.hit_dice_budget == 2
        assert [(s.level, s.missing) for s in rest.missing_slots] == [(1, 3), (2, 2)]

    def test_full_rest(self, rest: MediumRest) -> None:
        """Test a rest that uses every option."""
        options = rest.available_options()
        assert options == [
            MediumRestOption.HIT_DICE,
            MediumRestOption.SPELL_SLOTS,
            MediumRestOption.FEATURES,
        ]
        assert rest.select_options(options).valid is True

        wound_clears = rest.wound_clears_reset()
        hit_dice = rest.recover_hit_dice({"Sorcerer": 1, "Warlock": 1})
        slots = rest.recover_spell_slots({2: 1})
        features = rest.restore_features(["feat-font"])

        assert wound_clears == 2
        assert hit_dice.to_host_updates() == {
            "cls-sorc": {"system.hd.spent": 1},
            "cls-lock": {"system.hd.spent": 0},
        }
        assert slots.to_host_updates() == {"system.spells.spell2.value": 1}
        assert features.to_host_updates() == {"feat-font": {"system.uses.spent": 0}}
        assert rest.summary.message == (
            "Medium Rest complete: Wound clears reset, Recovered 2 hit dice, "
            "Restored 2 spell slot levels, Restored Font of Magic"
        )

    def test_each_option_once(self, rest: MediumRest) -> None:
        """Test that a second pass over the same option is refused."""
        rest.select_options(["hitdice"])
        rest.recover_hit_dice({"Sorcerer": 1})

        with pytest.raises(InvalidDataError, match="already applied"):
            rest.recover_hit_dice({"Sorcerer": 1})
        with pytest.raises(InvalidDataError, match="not selected"):
            rest.restore_features(["feat-font"])
        assert rest.summary.message == "Medium Rest complete: Recovered 1 hit dice"

    def test_rejected_picks_leave_summary_alone(self, rest: MediumRest) -> None:
        """Test that invalid picks produce no updates and no summary."""
        rest.select_options(["arcane", "features"])
        slots = rest.recover_spell_slots({1: 3})
        features = rest.restore_features(["feat-hex"])

        assert slots.valid is False
        assert features.valid is False
        assert features.to_host_updates() == {}
        assert rest.summary.message == "Medium Rest complete."

    def test_short_rest_only(self, sample_actor_data: dict[str, Any]) -> None:
        """Test a single ration: only the wound clears reset happens."""
        rest = MediumRest(load_character(sample_actor_data), rations=1)

        assert rest.select_options(["hitdice"]).valid is False
        rest.wound_clears_reset()

        assert rest.summary.message == "Medium Rest complete (Short Rest only): Wound clears reset"


class TestMalformedActors:
    """Host data problems surface as InvalidDataError."""

    def test_unknown_progression(self, sample_actor_data: dict[str, Any]) -> None:
        """Test that an unknown progression tag stops the rest by default."""
        sample_actor_data["items"][0]["system"]["spellcasting"]["progression"] = "artificer"
        rest = MediumRest(load_character(sample_actor_data), rations=2)
        rest.select_options(["arcane"])

        with pytest.raises(InvalidDataError, match="Sorcerer"):
            rest.recover_spell_slots({1: 1})

    def test_unknown_progression_ignored(
        self,
        sample_actor_data: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that the IGNORE policy drops the offending class."""
        monkeypatch.setenv("MEDIUM_REST_RECOVERY_UNKNOWN_PROGRESSION", "ignore")
        sample_actor_data["items"][0]["system"]["spellcasting"]["progression"] = "artificer"

        rest = MediumRest(load_character(sample_actor_data), rations=2)

        assert rest.caster_level == 0
        assert MediumRestOption.SPELL_SLOTS not in rest.available_options()

    def test_class_without_hit_dice(self, sample_actor_data: dict[str, Any]) -> None:
        """Test that hit dice recovery needs hit dice on every class."""
        del sample_actor_data["items"][1]["system"]["hd"]
        rest = MediumRest(load_character(sample_actor_data), rations=2)

        assert MediumRestOption.HIT_DICE not in rest.available_options()
        rest.select_options(["hitdice"])
        with pytest.raises(InvalidDataError, match="Warlock"):
            rest.recover_hit_dice({"Sorcerer": 1})
