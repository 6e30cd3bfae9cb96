"""Host data ingestion for the medium rest library.

Submodules:
    actor_loader: Convert host actor dictionaries into validated records.

Example:
    >>> from medium_rest.ingestion import load_character
    >>> character = load_character(actor_data)
"""

from __future__ import annotations

from medium_rest.ingestion.actor_loader import (
    find_counter_id,
    load_character,
    load_class_entry,
    load_feature,
    load_spell_slots,
)


__all__ = [
    "load_character",
    "load_class_entry",
    "load_feature",
    "load_spell_slots",
    "find_counter_id",
]
