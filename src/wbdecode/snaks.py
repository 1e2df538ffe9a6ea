"""
Snak decoding.

A snak's ``datavalue.type`` picks one of a closed set of decoders; the
``string`` type is further split by the snak's ``datatype``. Anything outside
the set raises ``UnsupportedSnakType`` rather than producing a partial claim.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from . import config
from .carbon_date import parse_wikibase_time
from .errors import DecodeError, MalformedSnak, UnsupportedSnakType
from .identifiers import EntityKind, classify
from .models import ENTITY_CLASSES, Claim, GlobeCoordinate, Property, Quantity, ValueKind
from .schema import snak_validator, validate_against_schema

logger = logging.getLogger(__name__)

_ENTITY_TYPE_PREFIXES = {
    "item": "Q",
    "property": "P",
}

_STRING_DATATYPES = {
    "external-id": ValueKind.EXTERNAL_ID,
    "url": ValueKind.URL,
    "commonsMedia": ValueKind.MEDIA,
    "math": ValueKind.MATH,
}


def _require_mapping(value, type_tag):
    if not isinstance(value, dict):
        raise MalformedSnak(f"A {type_tag} datavalue must be an object.", {"type": type_tag, "value": value})
    return value


def _decode_entity_id(value, datatype):
    value = _require_mapping(value, "wikibase-entityid")
    entity_id = value.get("id")
    if not entity_id:
        # Older serializations only carry entity-type + numeric-id.
        prefix = _ENTITY_TYPE_PREFIXES.get(value.get("entity-type"))
        numeric_id = value.get("numeric-id")
        if prefix and numeric_id is not None:
            entity_id = f"{prefix}{numeric_id}"
    entity_cls = ENTITY_CLASSES.get(classify(entity_id))
    if entity_cls is None:
        raise UnsupportedSnakType(
            f"Entity reference {entity_id!r} is neither an item nor a property.",
            {"type": "wikibase-entityid", "value": value},
        )
    return entity_cls(entity_id), ValueKind.ENTITY


def _decode_string(value, datatype):
    if not isinstance(value, str):
        raise MalformedSnak("A string datavalue must hold a string.", {"type": "string", "value": value})
    kind = _STRING_DATATYPES.get(datatype, ValueKind.TEXT)
    if kind is ValueKind.MEDIA:
        return f"{config.COMMONS_FILE_URL}{value}", kind
    return value, kind


def _decode_monolingual_text(value, datatype):
    value = _require_mapping(value, "monolingualtext")
    text = value["text"]
    if not isinstance(text, str):
        raise MalformedSnak("A monolingualtext datavalue must hold string text.", {"type": "monolingualtext", "value": value})
    return text, ValueKind.TEXT


def _decode_globe_coordinate(value, datatype):
    value = _require_mapping(value, "globecoordinate")
    coordinate = GlobeCoordinate(
        latitude=float(value["latitude"]),
        longitude=float(value["longitude"]),
    )
    return coordinate, ValueKind.GPS_COORDINATES


def _parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None:
        return None
    return Decimal(str(raw))


def _parse_unit(raw: Optional[str]) -> int:
    if raw is None or raw == config.UNITLESS_UNIT:
        return int(config.UNITLESS_UNIT)
    match = config.UNIT_ID_PATTERN.search(raw)
    if not match:
        raise MalformedSnak(f"Quantity unit {raw!r} is not an entity URI.", {"unit": raw})
    return int(match.group(1))


def _decode_quantity(value, datatype):
    value = _require_mapping(value, "quantity")
    quantity = Quantity(
        amount=_parse_amount(value["amount"]),
        upper_bound=_parse_amount(value.get("upperBound")),
        lower_bound=_parse_amount(value.get("lowerBound")),
        unit=_parse_unit(value.get("unit")),
    )
    return quantity, ValueKind.QUANTITY


def _decode_time(value, datatype):
    value = _require_mapping(value, "time")
    return parse_wikibase_time(value), ValueKind.CARBON_DATE


DATAVALUE_DECODERS = {
    "wikibase-entityid": _decode_entity_id,
    "string": _decode_string,
    "monolingualtext": _decode_monolingual_text,
    "globecoordinate": _decode_globe_coordinate,
    "quantity": _decode_quantity,
    "time": _decode_time,
}


def decode_snak(fragment: Any, property_id: Optional[str] = None) -> Claim:
    """
    Decode a snak (or a statement wrapping one in ``mainsnak``) into a Claim.

    ``property_id`` is used when the snak itself does not name its property,
    as happens when snaks are handed over already grouped by property.
    """
    if isinstance(fragment, dict) and "mainsnak" in fragment:
        fragment = fragment["mainsnak"]
    validate_against_schema(fragment, snak_validator(), MalformedSnak, "Snak")

    pid = fragment.get("property") or property_id
    if classify(pid) is not EntityKind.PROPERTY:
        raise MalformedSnak(f"Snak property {pid!r} is not a property id.", {"property": pid})
    prop = Property(pid)

    if fragment["snaktype"] != "value":
        logger.debug("[*] %s snak for %s carries no value.", fragment["snaktype"], pid)
        return Claim(prop, None, ValueKind.UNKNOWN)

    datavalue = fragment["datavalue"]
    type_tag = datavalue["type"]
    decoder = DATAVALUE_DECODERS.get(type_tag)
    if decoder is None:
        raise UnsupportedSnakType(
            f"Unsupported datavalue type {type_tag!r}.",
            {"type": type_tag, "property": pid, "supported": sorted(DATAVALUE_DECODERS)},
        )
    try:
        value, kind = decoder(datavalue["value"], fragment.get("datatype"))
        return Claim(prop, value, kind)
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise MalformedSnak(
            f"Malformed {type_tag} datavalue for {pid}: {exc!r}",
            {"type": type_tag, "property": pid, "value": datavalue["value"]},
        ) from exc
