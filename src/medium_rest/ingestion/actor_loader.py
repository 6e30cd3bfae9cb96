"""Load host actor data into validated character records.

The host (a virtual tabletop running the dnd5e system) hands over loosely
structured actor dictionaries. This module reads them in a single pass and
produces a CharacterSnapshot, so the recovery calculator never has to
look up optional nested keys.

Expected shapes:
    actor:   {"name", "system": {"attributes": {"prof"}, "spells"}, "items": [...]}
    class:   {"_id"|"id", "name", "type": "class", "system": {"levels", "spellcasting": {"progression"},
              "hd": {"denomination", "max", "spent"}}}
    feature: {"_id"|"id", "name", "type", "system": {"uses": {"max", "spent",
              "recovery": [{"period": "lr"}]}}}
    spells:  {"spell1": {"value", "max"}, ..., "spell9": {...}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from medium_rest.core.config import get_settings
from medium_rest.core.constants import MAX_SPELL_LEVEL, MIN_SPELL_LEVEL
from medium_rest.core.exceptions import InvalidDataError
from medium_rest.core.logging import get_logger
from medium_rest.models.character import (
    CharacterSnapshot,
    ClassEntry,
    Feature,
    SpellSlotTable,
)
from medium_rest.models.enums import RecoveryPeriod


logger = get_logger(__name__)

CLASS_ITEM_TYPE = "class"


def _system(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return data.get("system") or {}


def _invalid(kind: str, name: str | None, exc: ValidationError) -> InvalidDataError:
    return InvalidDataError(
        f"Invalid {kind} data",
        field_name=kind,
        class_name=name if kind == "class" else None,
        details={"name": name, "validation_errors": str(exc)},
    )


def load_class_entry(item: Mapping[str, Any]) -> ClassEntry:
    """Convert a host class item into a ClassEntry.

    Args:
        item: Host class item.

    Returns:
        The validated class entry. ``hit_dice`` is None when the item has
        no hit dice block.

    Raises:
        InvalidDataError: If the item data fails validation.
    """
    system = _system(item)
    spellcasting = system.get("spellcasting") or {}
    hd = system.get("hd")

    data: dict[str, Any] = {
        "name": item.get("name"),
        "id": item.get("_id") or item.get("id"),
        "levels": system.get("levels") or 0,
        "spellcasting_progression": spellcasting.get("progression"),
        "hit_dice": None,
    }
    if hd:
        data["hit_dice"] = {
            "denomination": hd.get("denomination"),
            "max": hd.get("max") or 0,
            "spent": hd.get("spent") or 0,
        }

    try:
        return ClassEntry.model_validate(data)
    except ValidationError as exc:
        raise _invalid("class", item.get("name"), exc) from exc


def load_spell_slots(spells: Mapping[str, Any] | None) -> SpellSlotTable:
    """Convert the host's ``spell1``..``spell9`` block into a SpellSlotTable.

    Levels with no maximum are left out.

    Raises:
        InvalidDataError: If a slot record fails validation.
    """
    spells = spells or {}
    slots: dict[int, dict[str, int]] = {}
    for level in range(MIN_SPELL_LEVEL, MAX_SPELL_LEVEL + 1):
        slot = spells.get(f"spell{level}")
        if not slot or not slot.get("max"):
            continue
        slots[level] = {"current": slot.get("value") or 0, "max": slot["max"]}

    try:
        return SpellSlotTable.model_validate({"slots": slots})
    except ValidationError as exc:
        raise _invalid("spell_slots", None, exc) from exc


def load_feature(item: Mapping[str, Any]) -> Feature:
    """Convert a host item with limited uses into a Feature.

    Recovery period codes the library does not know are dropped.

    Raises:
        InvalidDataError: If the item data fails validation.
    """
    system = _system(item)
    uses = system.get("uses") or {}

    periods: list[RecoveryPeriod] = []
    recovery = uses.get("recovery")
    if isinstance(recovery, list):
        for entry in recovery:
            code = entry.get("period") if isinstance(entry, Mapping) else None
            period = RecoveryPeriod.from_host_code(code) if code else None
            if period is None:
                logger.debug("Dropping unknown recovery period", item=item.get("name"), period=code)
                continue
            periods.append(period)

    subtype = system.get("type")
    item_type = (subtype.get("value") if isinstance(subtype, Mapping) else None) or item.get("type")

    data = {
        "id": item.get("_id") or item.get("id"),
        "name": item.get("name"),
        "uses_max": uses.get("max") or 0,
        "uses_spent": uses.get("spent") or 0,
        "recovery_periods": periods,
        "item_type": item_type,
    }

    try:
        return Feature.model_validate(data)
    except ValidationError as exc:
        raise _invalid("feature", item.get("name"), exc) from exc


def load_character(actor: Mapping[str, Any]) -> CharacterSnapshot:
    """Convert a host actor into a CharacterSnapshot.

    Class items become class entries; every other item carrying a uses
    block becomes a feature.

    Args:
        actor: Host actor data.

    Returns:
        The validated character snapshot.

    Raises:
        InvalidDataError: If any part of the actor fails validation.
    """
    system = _system(actor)
    attributes = system.get("attributes") or {}

    classes: list[ClassEntry] = []
    features: list[Feature] = []
    for item in actor.get("items") or []:
        if item.get("type") == CLASS_ITEM_TYPE:
            classes.append(load_class_entry(item))
        elif _system(item).get("uses"):
            features.append(load_feature(item))

    data = {
        "name": actor.get("name") or "Unknown Character",
        "classes": classes,
        "spell_slots": load_spell_slots(system.get("spells")),
        "features": features,
        "proficiency_bonus": attributes.get("prof") or 0,
    }

    try:
        character = CharacterSnapshot.model_validate(data)
    except ValidationError as exc:
        raise _invalid("character", actor.get("name"), exc) from exc

    logger.debug(
        "Character loaded",
        name=character.name,
        classes=len(character.classes),
        features=len(character.features),
    )
    return character


def find_counter_id(counters: Mapping[str, Mapping[str, Any]], label: str | None = None) -> str | None:
    """Find the id of a custom character counter by its label.

    Args:
        counters: Host counter definitions keyed by id.
        label: Counter label. Defaults to the configured wound clears label.

    Returns:
        The counter id, or None if no counter has that label.
    """
    if label is None:
        label = get_settings().recovery.wound_clears_label
    for counter_id, counter in counters.items():
        if counter.get("label") == label:
            return counter_id
    return None


__all__ = [
    "load_class_entry",
    "load_spell_slots",
    "load_feature",
    "load_character",
    "find_counter_id",
]
