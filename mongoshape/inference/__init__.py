# ==============================================
# SCHEMA INFERENCE
# ==============================================
#
# This package derives a structural summary from a sample
# of schemaless documents.
#
# Modules:
# --------
# - type_classifier.py   → Type tag of one value (ObjectId, Date, Array<T>, ...)
# - samples.py           → Deep equality and rendering of example values
# - field_stats.py       → FieldStat / SchemaSummary data classes
# - schema_aggregator.py → Walk a sample, accumulate stats, recurse into sub-documents
# - report.py            → Collection description for clients
#
# ==============================================

from .type_classifier import MISSING, TypeClassifier
from .field_stats import FieldStat, SchemaSummary
from .schema_aggregator import SchemaAggregator, infer_schema
from .report import build_collection_report

__all__ = [
    "MISSING",
    "TypeClassifier",
    "FieldStat",
    "SchemaSummary",
    "SchemaAggregator",
    "infer_schema",
    "build_collection_report",
]
