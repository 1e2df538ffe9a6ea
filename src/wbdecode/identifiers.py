from __future__ import annotations

from enum import Enum
from typing import Iterable

from . import config


class EntityKind(str, Enum):
    ITEM = "item"
    PROPERTY = "property"
    UNKNOWN = "unknown"


_PREFIX_KINDS = {
    "Q": EntityKind.ITEM,
    "P": EntityKind.PROPERTY,
}


def classify(entity_id) -> EntityKind:
    """Classify an identifier by its leading character alone (Q = item, P = property)."""
    if not isinstance(entity_id, str) or not entity_id:
        return EntityKind.UNKNOWN
    return _PREFIX_KINDS.get(entity_id[0], EntityKind.UNKNOWN)


def valid_ids(ids: Iterable[str], allowed_kinds: Iterable[str]) -> bool:
    """Return True iff every identifier classifies into one of the allowed kinds."""
    allowed = {EntityKind(kind) for kind in allowed_kinds}
    return all(classify(entity_id) in allowed for entity_id in ids)


def is_qid(value):
    """Return True if the value looks like a Wikidata item id (Q*)."""
    if not isinstance(value, str):
        return False
    return bool(config.QID_EXACT_PATTERN.fullmatch(value.strip()))


def is_pid(value):
    """Return True if the value looks like a Wikidata property id (P*)."""
    if not isinstance(value, str):
        return False
    return bool(config.PID_EXACT_PATTERN.fullmatch(value.strip()))


def is_entity_or_property_id(value):
    """Return True for valid QIDs or PIDs."""
    return is_qid(value) or is_pid(value)
