"""Thin Action API transport that hands raw bodies to the decoders."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

import requests

from . import config
from .errors import TransportError
from .identifiers import is_entity_or_property_id
from .models import EntityResult, Search
from .parser import decode_entities, decode_search

logger = logging.getLogger(__name__)


def chunked(iterable, size):
    """Yield iterable slices of fixed size (used for batched API lookups)."""
    batch = []
    for item in iterable:
        batch.append(item)
        if len(batch) == size:
            yield batch
            batch = []
    if batch:
        yield batch


def get_text(params=None, *, endpoint=config.API_ENDPOINT, session=None):
    """Fetch a raw response body with retries and default MediaWiki params."""
    query = dict(params or {})
    query.setdefault("format", "json")
    http = session or requests
    last_status = None
    for attempt in range(config.MAX_RETRIES):
        try:
            response = http.get(
                endpoint,
                headers=config.HEADERS,
                params=query,
                timeout=config.API_TIMEOUT,
            )
        except requests.RequestException as exc:
            logger.warning("[!] Request to %s failed: %s", endpoint, exc)
        else:
            last_status = response.status_code
            if response.status_code == 200:
                return response.text
            if response.status_code == 429:
                sleep_for = 2**attempt
                logger.warning("[!] Rate limited. Sleeping %ss...", sleep_for)
                time.sleep(sleep_for)
                continue
            logger.warning("[!] HTTP %s for %s", response.status_code, endpoint)
        time.sleep(0.1)
    raise TransportError(
        f"Giving up on {endpoint} after {config.MAX_RETRIES} attempts.",
        status_code=last_status,
    )


def search(term: str, lang: Optional[str] = None, entity_type: str = "item", limit: int = config.SEARCH_LIMIT, session=None) -> Search:
    """Run ``wbsearchentities`` for ``term`` and decode the response."""
    lang = lang or config.DEFAULT_LANGUAGE
    params = {
        "action": "wbsearchentities",
        "search": term,
        "language": lang,
        "uselang": lang,
        "type": entity_type,
        "limit": limit,
    }
    return decode_search(get_text(params, session=session))


def get_entities(ids: Iterable[str], lang: Optional[str] = None, session=None) -> EntityResult:
    """
    Fetch and decode entities via ``wbgetentities``, batching ids by the API limit.

    Batch results are merged in request order. The merged result is successful
    only if every batch was; the first batch error is kept.
    """
    lang = lang or config.DEFAULT_LANGUAGE
    id_list = list(ids)
    invalid = [entity_id for entity_id in id_list if not is_entity_or_property_id(entity_id)]
    if invalid:
        raise ValueError(f"Not item or property ids: {invalid}")

    entities = []
    missing_ids = []
    success = True
    error = error_code = None
    for batch in chunked(id_list, config.GET_ENTITIES_BATCH_SIZE):
        params = {
            "action": "wbgetentities",
            "ids": "|".join(batch),
            "languages": lang,
            "props": "labels|descriptions|aliases|claims",
        }
        result = decode_entities(get_text(params, session=session), lang=lang)
        entities.extend(result.entities)
        missing_ids.extend(result.missing_ids)
        if not result.success:
            success = False
            if error is None:
                error, error_code = result.error, result.error_code
    return EntityResult(
        success=success,
        entities=tuple(entities),
        error=error,
        error_code=error_code,
        missing_ids=tuple(missing_ids),
    )
