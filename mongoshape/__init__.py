# ==============================================
# mongoshape
# ==============================================
#
# Package Structure:
#
# mongoshape/
# ├── inference/        # Schema inference over a document sample
# ├── normalization/    # ObjectId / date coercion of client payloads
# ├── errors.py         # Typed errors surfaced to callers
# ├── config.py         # Configuration management
# └── cli.py            # Command line entry point
#
# Entry points for the request layer:
#   infer_schema(documents)        -> SchemaSummary
#   normalize_value(value, policy) -> dict | list
#
# ==============================================

from .errors import (
    DepthExceededError,
    InvalidPolicyError,
    InvalidShapeError,
    MalformedInputError,
    MongoShapeError,
)
from .inference import SchemaSummary, FieldStat, infer_schema
from .normalization import CoercionPolicy, normalize_value

__version__ = "0.1.0"

__all__ = [
    "infer_schema",
    "normalize_value",
    "SchemaSummary",
    "FieldStat",
    "CoercionPolicy",
    "MongoShapeError",
    "MalformedInputError",
    "InvalidShapeError",
    "DepthExceededError",
    "InvalidPolicyError",
]
