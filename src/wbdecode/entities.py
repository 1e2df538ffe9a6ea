from __future__ import annotations

from typing import Any, Optional

from . import config
from .errors import MalformedEntity
from .identifiers import classify
from .models import ENTITY_CLASSES, Entity
from .schema import entity_validator, validate_against_schema
from .snaks import decode_snak


def _pick_language(terms, *langs):
    """Return the entry for the first of ``langs`` present, else the first language present."""
    if not terms:
        return None
    for lang in langs:
        if lang in terms:
            return terms[lang]
    return next(iter(terms.values()))


def resolve_language(entity, lang=config.DEFAULT_LANGUAGE):
    """Return ``lang`` when the entity is labelled in it, else the language of its first label."""
    labels = entity.get("labels")
    if not labels or lang in labels:
        return lang
    return next(iter(labels))


def pick_label(entity, lang=config.DEFAULT_LANGUAGE):
    """Return preferred label for an entity, falling back to any language."""
    term = _pick_language(entity.get("labels"), lang)
    return term["value"] if term is not None else None


def pick_description(entity, lang=config.DEFAULT_LANGUAGE, fallback_lang=None):
    """Return preferred description for an entity, falling back to any language."""
    term = _pick_language(entity.get("descriptions"), lang, fallback_lang)
    return term["value"] if term is not None else None


def pick_aliases(entity, lang=config.DEFAULT_LANGUAGE, fallback_lang=None):
    """Return alias strings in declared order for the preferred language."""
    terms = _pick_language(entity.get("aliases"), lang, fallback_lang) or []
    return [term["value"] for term in terms]


def decode_entity(fragment: Any, lang: Optional[str] = None) -> Entity:
    """
    Decode one entity element into an Item or Property.

    The concrete class is picked once from the identifier prefix and must agree
    with the element's ``type`` discriminator. Every statement's main snak is
    decoded; claims keep the source order within and across properties.
    """
    lang = lang or config.DEFAULT_LANGUAGE
    validate_against_schema(fragment, entity_validator(), MalformedEntity, "Entity")

    entity_id = fragment["id"]
    kind = classify(entity_id)
    entity_cls = ENTITY_CLASSES.get(kind)
    if entity_cls is None:
        raise MalformedEntity(f"Entity id {entity_id!r} is neither an item nor a property.", {"id": entity_id})
    if fragment["type"] != kind.value:
        raise MalformedEntity(
            f"Entity {entity_id} is declared as {fragment['type']!r} but its id names a {kind.value}.",
            {"id": entity_id, "type": fragment["type"]},
        )

    claims = {}
    for property_id, statements in (fragment.get("claims") or {}).items():
        claims[property_id] = [decode_snak(statement, property_id=property_id) for statement in statements]

    # Descriptions and aliases follow the language the label was found in.
    term_lang = resolve_language(fragment, lang)
    return entity_cls(
        id=entity_id,
        label=pick_label(fragment, term_lang),
        description=pick_description(fragment, term_lang, lang),
        aliases=pick_aliases(fragment, term_lang, lang),
        claims=claims,
    )
