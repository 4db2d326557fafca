# ==============================================
# VALUE NORMALIZATION
# ==============================================
#
# This package rewrites client-supplied filters, updates and
# documents before they reach the driver, turning string
# forms of ObjectIds and ISO dates into real BSON values.
#
# Modules:
# --------
# - coercion.py          → CoercionPolicy + single-string rules
# - value_normalizer.py  → Recursive tree normalization, text parsing
# - payloads.py          → Per-operation shape checks (filter, update, ...)
#
# ==============================================

from .coercion import CoercionPolicy, StringCoercer
from .value_normalizer import ValueNormalizer, normalize_value, parse_payload
from .payloads import (
    UPDATE_OPERATORS,
    normalize_documents,
    normalize_index_specs,
    normalize_pipeline,
    normalize_update,
    parse_filter,
)

__all__ = [
    "CoercionPolicy",
    "StringCoercer",
    "ValueNormalizer",
    "normalize_value",
    "parse_payload",
    "UPDATE_OPERATORS",
    "normalize_documents",
    "normalize_index_specs",
    "normalize_pipeline",
    "normalize_update",
    "parse_filter",
]
