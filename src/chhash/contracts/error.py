"""Error taxonomy and machine-readable error envelopes for chhash."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ErrorEnvelope:
    """Machine-readable error contract for reported failures."""

    error: str
    detail: str
    hint: str | None = None

    def to_json(self) -> str:
        payload = {"error": self.error, "detail": self.detail}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


class EnvelopeError(Exception):
    """Base exception that carries an optional hint for the error envelope."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class BadInputError(EnvelopeError):
    """Raised for malformed user input (config files, env overrides, etc.)."""


class InvalidConfigurationError(BadInputError):
    """Raised when a map or hasher is constructed with unusable parameters."""


class InvariantError(EnvelopeError):
    """Raised when internal consistency checks fail."""


# Most specific first: InvalidConfigurationError is also a BadInputError.
_EXCEPTION_ORDER: tuple[tuple[type[EnvelopeError], str], ...] = (
    (InvalidConfigurationError, "InvalidConfiguration"),
    (BadInputError, "BadInput"),
    (InvariantError, "Invariant"),
)


def describe_error(exc: BaseException) -> ErrorEnvelope:
    """Translate ``exc`` into the envelope reported to callers."""

    if isinstance(exc, EnvelopeError):
        for exc_type, label in _EXCEPTION_ORDER:
            if isinstance(exc, exc_type):
                return ErrorEnvelope(error=label, detail=str(exc), hint=exc.hint)
        return ErrorEnvelope(error="UnhandledEnvelope", detail=str(exc), hint=exc.hint)
    logger.debug("Describing non-envelope exception %s", type(exc).__name__)
    return ErrorEnvelope(error="Unhandled", detail=f"{type(exc).__name__}: {exc}")


__all__ = [
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "InvalidConfigurationError",
    "InvariantError",
    "describe_error",
]
