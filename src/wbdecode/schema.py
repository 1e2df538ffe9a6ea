from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

import jsonschema

from . import config
from .errors import DecodeError


def load_schema(path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=None)
def _validator(path) -> jsonschema.Draft202012Validator:
    return jsonschema.Draft202012Validator(load_schema(path))


def entity_validator() -> jsonschema.Draft202012Validator:
    return _validator(config.ENTITY_SCHEMA_FILE)


def snak_validator() -> jsonschema.Draft202012Validator:
    return _validator(config.SNAK_SCHEMA_FILE)


def validate_against_schema(obj: Any, validator: jsonschema.Draft202012Validator, error_cls: type[DecodeError], what: str) -> None:
    """Raise ``error_cls`` describing the shallowest schema violation, if any."""
    errors = sorted(validator.iter_errors(obj), key=lambda e: len(list(e.absolute_path)))
    if errors:
        error = errors[0]
        details = {
            "path": list(error.absolute_path),
            "schema_path": list(error.absolute_schema_path),
            "message": error.message,
        }
        raise error_cls(f"{what} does not match the expected shape: {error.message}", details)
