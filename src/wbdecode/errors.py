from __future__ import annotations

from typing import Any, Optional


class DecodeError(Exception):
    """Base class for every structural failure raised while decoding a response."""

    default_code = "DECODE_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class MalformedResponse(DecodeError):
    default_code = "SCHEMA_VIOLATION"


class MissingSearchSection(DecodeError, ValueError):
    """Search decoding was applied to a body that carries no search section at all."""

    default_code = "MISSING_SEARCH_SECTION"


class MalformedEntity(DecodeError):
    default_code = "MALFORMED_ENTITY"


class MalformedSnak(DecodeError):
    default_code = "MALFORMED_SNAK"


class UnsupportedSnakType(DecodeError):
    default_code = "UNSUPPORTED_SNAK_TYPE"


class UnsupportedPrecision(DecodeError):
    default_code = "UNSUPPORTED_PRECISION"


class TransportError(Exception):
    """Raised by the HTTP helper once every retry has failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
