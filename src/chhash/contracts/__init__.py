"""Contract helpers for chhash."""

from .error import (
    BadInputError,
    EnvelopeError,
    ErrorEnvelope,
    InvalidConfigurationError,
    InvariantError,
    describe_error,
)

__all__ = [
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "InvalidConfigurationError",
    "InvariantError",
    "describe_error",
]
