# ==============================================
# Collection Report
# ==============================================
#
# PURPOSE:
#   Render the collection description handed back to a client:
#   the inferred fields plus what the caller already fetched
#   from the database (index definitions, document count).
#
#   Nothing here talks to the database. Indexes and counts are
#   passed in as-is and only reshaped for output.
#
# FUNCTION:
# ---------
# - build_collection_report(
#       collection_name, documents, indexes=None,
#       document_count=None, generated_at=None, aggregator=None
#   ) -> dict
#
#   Output shape:
#     {
#       "type": "collection",
#       "name": "users",
#       "fields": [...],
#       "indexes": [{"name": "_id_", "keys": {"_id": 1}}],
#       "documentCount": 1250 | "unknown",
#       "sampleSize": 100,
#       "lastUpdated": "2024-01-01T00:00:00.000Z"
#     }
#
# ==============================================

import datetime
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Union

from .samples import format_iso
from .schema_aggregator import SchemaAggregator, infer_schema


UNKNOWN_COUNT = "unknown"


def _describe_indexes(indexes: Optional[Iterable[Mapping]]) -> List[Dict[str, Any]]:
    if not indexes:
        return []
    return [
        {"name": index.get("name"), "keys": dict(index.get("key") or {})}
        for index in indexes
    ]


def build_collection_report(
    collection_name: str,
    documents: List[Mapping],
    indexes: Optional[Iterable[Mapping]] = None,
    document_count: Optional[Union[int, str]] = None,
    generated_at: Optional[datetime.datetime] = None,
    aggregator: Optional[SchemaAggregator] = None
) -> Dict[str, Any]:
    """
    Build the JSON-ready description of a sampled collection.

    Args:
        collection_name: Name of the sampled collection
        documents: The sample, as fetched by the caller
        indexes: Index descriptions as returned by the driver
            (each with "name" and "key")
        document_count: Total documents, or None when the count timed out
        generated_at: Timestamp for "lastUpdated" (defaults to now, UTC)
        aggregator: Aggregator to use instead of the configured one

    Returns:
        Dictionary ready for JSON serialization
    """
    documents = list(documents or [])
    summary = aggregator.infer(documents) if aggregator else infer_schema(documents)
    generated_at = generated_at or datetime.datetime.now(datetime.timezone.utc)

    return {
        "type": "collection",
        "name": collection_name,
        "fields": summary.to_dict()["fields"],
        "indexes": _describe_indexes(indexes),
        "documentCount": UNKNOWN_COUNT if document_count is None else document_count,
        "sampleSize": len(documents),
        "lastUpdated": format_iso(generated_at),
    }
