"""
wbdecode: typed decoding of Wikibase (Wikidata) API responses.

Raw ``wbsearchentities`` / ``wbgetentities`` bodies go in, immutable
Search / EntityResult graphs come out:

    from wbdecode import decode_entities
    result = decode_entities(body)
    if result.success:
        for entity in result.entities:
            ...
"""

from .carbon_date import CalendarValue, Precision, normalize
from .entities import decode_entity
from .errors import (
    DecodeError,
    MalformedEntity,
    MalformedResponse,
    MalformedSnak,
    MissingSearchSection,
    TransportError,
    UnsupportedPrecision,
    UnsupportedSnakType,
)
from .identifiers import EntityKind, classify, valid_ids
from .models import (
    Claim,
    Entity,
    EntityResult,
    GlobeCoordinate,
    Item,
    Property,
    Quantity,
    Search,
    SearchResult,
    ValueKind,
)
from .parser import decode_entities, decode_search, iter_dump_entities
from .snaks import decode_snak

__version__ = "0.1.0"

__all__ = [
    "CalendarValue",
    "Claim",
    "DecodeError",
    "Entity",
    "EntityKind",
    "EntityResult",
    "GlobeCoordinate",
    "Item",
    "MalformedEntity",
    "MalformedResponse",
    "MalformedSnak",
    "MissingSearchSection",
    "Precision",
    "Property",
    "Quantity",
    "Search",
    "SearchResult",
    "TransportError",
    "UnsupportedPrecision",
    "UnsupportedSnakType",
    "ValueKind",
    "classify",
    "decode_entities",
    "decode_entity",
    "decode_search",
    "decode_snak",
    "iter_dump_entities",
    "normalize",
    "valid_ids",
]
