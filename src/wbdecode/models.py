from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Iterator, Mapping, Optional, Union

from .carbon_date import CalendarValue
from .identifiers import EntityKind


class ValueKind(str, Enum):
    """Tag naming the runtime shape of a decoded claim value."""

    ENTITY = "entity"
    TEXT = "text"
    URL = "url"
    MEDIA = "media"
    GPS_COORDINATES = "gps_coordinates"
    QUANTITY = "quantity"
    CARBON_DATE = "carbon_date"
    MATH = "math"
    EXTERNAL_ID = "external_id"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GlobeCoordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Quantity:
    amount: Decimal
    upper_bound: Optional[Decimal]
    lower_bound: Optional[Decimal]
    unit: int


@dataclass(frozen=True)
class Entity:
    """
    Shared shape of items and properties.

    Label and description stay None when the source has none for the chosen
    language; an empty string is kept as an empty string. Claims are grouped
    by property id in source order.
    """

    kind: ClassVar[EntityKind] = EntityKind.UNKNOWN

    id: str
    label: Optional[str] = None
    description: Optional[str] = None
    aliases: tuple[str, ...] = ()
    claims: Mapping[str, tuple["Claim", ...]] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "aliases", tuple(self.aliases))
        frozen_claims = {pid: tuple(group) for pid, group in self.claims.items()}
        object.__setattr__(self, "claims", MappingProxyType(frozen_claims))

    def has_claims(self) -> bool:
        return any(self.claims.values())

    def claims_for(self, property_id: str) -> tuple["Claim", ...]:
        return self.claims.get(property_id, ())

    def all_claims(self) -> Iterator["Claim"]:
        for group in self.claims.values():
            yield from group

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, label={self.label!r})"


@dataclass(frozen=True, repr=False)
class Item(Entity):
    kind: ClassVar[EntityKind] = EntityKind.ITEM


@dataclass(frozen=True, repr=False)
class Property(Entity):
    kind: ClassVar[EntityKind] = EntityKind.PROPERTY


ENTITY_CLASSES = {
    EntityKind.ITEM: Item,
    EntityKind.PROPERTY: Property,
}

ClaimValue = Union[Entity, str, GlobeCoordinate, Quantity, CalendarValue, None]

_VALUE_SHAPES = {
    ValueKind.ENTITY: Entity,
    ValueKind.TEXT: str,
    ValueKind.URL: str,
    ValueKind.MEDIA: str,
    ValueKind.MATH: str,
    ValueKind.EXTERNAL_ID: str,
    ValueKind.GPS_COORDINATES: GlobeCoordinate,
    ValueKind.QUANTITY: Quantity,
    ValueKind.CARBON_DATE: CalendarValue,
    ValueKind.UNKNOWN: type(None),
}


@dataclass(frozen=True)
class Claim:
    property: Property
    value: ClaimValue
    value_type: ValueKind

    def __post_init__(self):
        expected = _VALUE_SHAPES[self.value_type]
        if not isinstance(self.value, expected):
            raise TypeError(
                f"Claim value {self.value!r} does not match value type {self.value_type.value!r}."
            )


@dataclass(frozen=True)
class SearchResult:
    id: str
    type: EntityKind
    label: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Search:
    success: bool
    search_term: Optional[str]
    results: tuple[SearchResult, ...] = ()
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def empty(self) -> bool:
        return not self.results

    @property
    def top_result(self) -> Optional[SearchResult]:
        return self.results[0] if self.results else None


@dataclass(frozen=True)
class EntityResult:
    success: bool
    entities: tuple[Entity, ...] = ()
    error: Optional[str] = None
    error_code: Optional[str] = None
    missing_ids: tuple[str, ...] = ()

    @property
    def empty(self) -> bool:
        return not self.entities

    def get(self, entity_id: str) -> Optional[Entity]:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def ids(self) -> list[str]:
        return [entity.id for entity in self.entities]

