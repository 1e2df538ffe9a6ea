"""
Top-level decoding of Wikibase Action API responses.

``decode_search`` handles ``wbsearchentities`` envelopes and
``decode_entities`` handles ``wbgetentities`` envelopes. An explicit API
error object is a normal, fully decoded result with ``success=False``; a body
that cannot be decoded raises a ``DecodeError`` and nothing partial is
returned.
"""

from __future__ import annotations

import gzip
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Iterator, Optional, Union

import ijson
from tqdm import tqdm

from . import config
from .entities import decode_entity
from .errors import MalformedEntity, MalformedResponse, MissingSearchSection
from .identifiers import classify
from .models import Entity, EntityResult, Search, SearchResult

logger = logging.getLogger(__name__)

Body = Union[str, bytes, bytearray, dict]

__all__ = [
    "decode_search",
    "decode_entities",
    "iter_dump_entities",
]


def _parse_body(body: Body) -> dict[str, Any]:
    if isinstance(body, (str, bytes, bytearray)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as exc:
            details = {"message": exc.msg, "line": exc.lineno, "column": exc.colno}
            raise MalformedResponse("Response body is not valid JSON.", details, code="INVALID_JSON") from exc
    if not isinstance(body, dict):
        raise MalformedResponse("Response body must be a JSON object.", {"value_type": type(body).__name__})
    return body


def safe_get(payload, *keys, default=None):
    """Traverse nested dicts safely and return default on missing keys."""
    cur = payload
    for key in keys:
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def _api_error(payload):
    """Return (message, code) for an envelope-level error object, or (None, None)."""
    error = payload.get("error")
    if error is None:
        return None, None
    if isinstance(error, dict):
        code = error.get("code")
        return error.get("info") or code or "Unknown API error", code
    return str(error), None


def _success_flag(payload) -> bool:
    return bool(payload.get("success", 1))


def _decode_search_hit(hit) -> SearchResult:
    if not isinstance(hit, dict) or not isinstance(hit.get("id"), str):
        raise MalformedEntity("Search hit has no string id.", {"hit": hit})
    return SearchResult(
        id=hit["id"],
        type=classify(hit["id"]),
        label=hit.get("label"),
        description=hit.get("description"),
    )


def decode_search(body: Body) -> Search:
    """
    Decode a ``wbsearchentities`` response into a Search.

    A present-but-empty ``search`` list is a successful search with no hits.
    A body without any ``search`` key (and no API error) was never a search
    response and raises ``MissingSearchSection``.
    """
    payload = _parse_body(body)
    search_term = safe_get(payload, "searchinfo", "search")
    error, error_code = _api_error(payload)
    if error is not None:
        logger.debug("[!] Search for %r returned API error %s.", search_term, error_code)
        return Search(success=False, search_term=search_term, error=error, error_code=error_code)

    if "search" not in payload:
        raise MissingSearchSection(
            "Response has no search section; it is not a search response.",
            {"keys": sorted(payload)},
        )
    hits = payload["search"]
    if not isinstance(hits, list):
        raise MalformedResponse("Search section must be a list.", {"value_type": type(hits).__name__})

    return Search(
        success=_success_flag(payload),
        search_term=search_term,
        results=tuple(_decode_search_hit(hit) for hit in hits),
    )


def decode_entities(body: Body, lang: Optional[str] = None) -> EntityResult:
    """
    Decode a ``wbgetentities`` response into an EntityResult.

    Elements flagged ``missing`` are reported by id instead of decoded. Any
    other element that fails to decode fails the whole call.
    """
    payload = _parse_body(body)
    error, error_code = _api_error(payload)
    section = payload.get("entities") or {}
    if not isinstance(section, dict):
        raise MalformedResponse("Entities section must be an object keyed by id.", {"value_type": type(section).__name__})

    entities = []
    missing_ids = []
    for key, element in section.items():
        if isinstance(element, dict) and "missing" in element:
            logger.debug("[*] Entity %s is missing upstream; skipping.", element.get("id") or key)
            missing_ids.append(element.get("id") or key)
            continue
        entities.append(decode_entity(element, lang))

    return EntityResult(
        success=error is None and _success_flag(payload),
        entities=tuple(entities),
        error=error,
        error_code=error_code,
        missing_ids=tuple(missing_ids),
    )


def _format_elapsed(seconds):
    """Return compact HH:MM:SS elapsed display."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _open_dump(path: Path):
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return open(path, "rb")


def iter_dump_entities(dump_path, lang: Optional[str] = None, total_hint: Optional[int] = None) -> Iterator[Entity]:
    """
    Stream a JSON-array entity dump (plain or gzip), yielding decoded entities.

    The dump is never loaded whole; ijson walks the top-level array. Decode
    failures propagate to the caller.
    """
    path = Path(dump_path)
    heartbeat_every_seconds = max(1, int(config.PROGRESS_HEARTBEAT_SECONDS))
    scan_start = time.monotonic()
    last_heartbeat = scan_start
    scanned = 0
    with _open_dump(path) as fh:
        stream = ijson.items(fh, "item", use_float=True)
        for scanned, element in enumerate(
            tqdm(
                stream,
                desc="Decoding dump",
                unit=" entity",
                miniters=10000,
                total=total_hint,
                disable=not sys.stderr.isatty(),
            ),
            start=1,
        ):
            yield decode_entity(element, lang)
            now = time.monotonic()
            if now - last_heartbeat >= heartbeat_every_seconds:
                elapsed = now - scan_start
                logger.info(
                    "[*] Dump decode heartbeat: %s entities in %s (%.2f entities/s).",
                    f"{scanned:,}",
                    _format_elapsed(elapsed),
                    scanned / elapsed if elapsed > 0 else 0.0,
                )
                last_heartbeat = now
    logger.info("[+] Decoded %s entities from %s.", f"{scanned:,}", path)
