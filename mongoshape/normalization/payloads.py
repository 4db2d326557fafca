# ==============================================
# Operation Payloads
# ==============================================
#
# PURPOSE:
#   Shape checks + normalization for the payload of each
#   database operation a client can request. The request
#   layer calls one of these and hands the result to the driver.
#
# FUNCTIONS:
# ----------
# - parse_filter(filter, policy)          → query / count filter
# - normalize_update(update, policy)      → update spec with operators
# - normalize_pipeline(pipeline, policy)  → aggregation stages
# - normalize_documents(documents, policy)→ insert payload
# - normalize_index_specs(indexes, policy)→ createIndexes payload
#
#   All of them accept either a parsed tree or its JSON text and
#   raise InvalidShapeError when the shape is wrong.
#
# ==============================================

from collections.abc import Mapping
from typing import Any, Dict, List, Union

from .coercion import CoercionPolicy
from .value_normalizer import ValueNormalizer, parse_payload
from mongoshape.config import get_config
from mongoshape.errors import InvalidShapeError


PolicyLike = Union[CoercionPolicy, str, None]

UPDATE_OPERATORS = [
    "$set", "$unset", "$inc", "$push", "$pull",
    "$addToSet", "$pop", "$rename", "$mul"
]


def _normalizer(policy: PolicyLike) -> ValueNormalizer:
    return ValueNormalizer(policy, max_depth=get_config().max_nesting_depth)


def _load(payload: Any) -> Any:
    if isinstance(payload, (str, bytes, bytearray)):
        return parse_payload(payload)
    return payload


def parse_filter(filter: Any, policy: PolicyLike = CoercionPolicy.AUTO) -> Dict[str, Any]:
    """
    Normalize a query filter. An empty filter matches everything.

    Raises:
        MalformedInputError: filter text is not valid JSON
        InvalidShapeError: filter is not an object
    """
    if not filter:
        return {}

    filter = _load(filter)
    if not isinstance(filter, Mapping):
        raise InvalidShapeError("Query filter must be a plain object")

    return _normalizer(policy).normalize(filter)


def normalize_update(update: Any, policy: PolicyLike = CoercionPolicy.AUTO) -> Dict[str, Any]:
    """
    Normalize an update specification.

    The update has to be an object with at least one update operator;
    replacement documents are not accepted here.
    """
    update = _load(update)
    if not isinstance(update, Mapping):
        raise InvalidShapeError("Update must be a valid MongoDB update object")

    if not any(key in UPDATE_OPERATORS for key in update):
        raise InvalidShapeError(
            "Update must contain at least one valid MongoDB update operator. "
            f"Valid operators: {', '.join(UPDATE_OPERATORS)}"
        )

    return _normalizer(policy).normalize(update)


def normalize_pipeline(pipeline: Any, policy: PolicyLike = CoercionPolicy.AUTO) -> List[Any]:
    """Normalize every object stage of an aggregation pipeline."""
    pipeline = _load(pipeline)
    if not isinstance(pipeline, (list, tuple)):
        raise InvalidShapeError("Pipeline must be an array")

    normalizer = _normalizer(policy)
    return [
        normalizer.normalize(stage) if isinstance(stage, Mapping) else stage
        for stage in pipeline
    ]


def normalize_documents(documents: Any, policy: PolicyLike = CoercionPolicy.AUTO) -> List[Dict[str, Any]]:
    """Normalize the documents of an insert request."""
    documents = _load(documents)
    if not isinstance(documents, (list, tuple)) or not documents:
        raise InvalidShapeError("documents must be a non-empty array")

    normalizer = _normalizer(policy)
    normalized = []
    for position, document in enumerate(documents):
        if not isinstance(document, Mapping):
            raise InvalidShapeError(f"Each document must be a valid object (index {position})")
        normalized.append(normalizer.normalize(document))
    return normalized


def normalize_index_specs(indexes: Any, policy: PolicyLike = CoercionPolicy.AUTO) -> List[Dict[str, Any]]:
    """
    Normalize index definitions. Only the ``key`` of each
    definition is rewritten; options such as ``name`` or
    ``unique`` are copied through.
    """
    indexes = _load(indexes)
    if not isinstance(indexes, (list, tuple)) or not indexes:
        raise InvalidShapeError("indexes must be a non-empty array")

    normalizer = _normalizer(policy)
    normalized = []
    for index in indexes:
        if not isinstance(index, Mapping) or not isinstance(index.get("key"), Mapping):
            raise InvalidShapeError("Each index must be an object with a 'key' field")
        spec = dict(index)
        spec["key"] = normalizer.normalize(index["key"])
        normalized.append(spec)
    return normalized
