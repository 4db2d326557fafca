# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Typed errors surfaced to the caller by both engines.
#   Nothing here is retried: the engines are deterministic,
#   so the same input always fails the same way.
#
# CLASSES:
# --------
# - MongoShapeError        → base class for everything below
# - MalformedInputError    → text payload could not be parsed
# - InvalidShapeError      → payload is not the required object/array
# - DepthExceededError     → nesting deeper than the configured ceiling
# - InvalidPolicyError     → unknown coercion policy selector
#
# ==============================================

from typing import Optional


class MongoShapeError(Exception):
    """Base class for all errors raised by mongoshape."""


class MalformedInputError(MongoShapeError, ValueError):
    """
    Raised when a textual payload is not a parsable structure.

    The parser's own failure reason is kept on ``reason`` so the
    caller can surface it verbatim.
    """

    def __init__(self, reason: str, text: Optional[str] = None):
        self.reason = reason
        self.text = text
        super().__init__(f"Invalid payload format: must be valid JSON ({reason})")


class InvalidShapeError(MongoShapeError, TypeError):
    """Raised when a payload is not the object/array an operation requires."""


class DepthExceededError(MongoShapeError, RecursionError):
    """Raised when a value nests deeper than the allowed ceiling."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Value nesting exceeds the maximum depth of {max_depth}")


class InvalidPolicyError(MongoShapeError, ValueError):
    """Raised for an ObjectId coercion mode other than auto/none/force."""
