# ==============================================
# SchemaAggregator
# ==============================================
#
# PURPOSE:
#   Observe a sample of documents and build a SchemaSummary:
#   one FieldStat per distinct field name, in first-seen order,
#   with nested summaries for sub-document fields.
#
# CLASS: SchemaAggregator
# -----------------------
#   Stateless between calls: every infer() builds its own
#   accumulator and returns it.
#
#   Constructor:
#   ------------
#   - __init__(max_examples: int = 3, max_depth: int = 100)
#
#   Methods:
#   --------
#   - infer(documents: list[dict]) -> SchemaSummary
#       1. For every document, for every key:
#            classify the value, update the field's FieldStat
#       2. Nullability: a field missing from any document is nullable
#       3. Prevalence denominators: size of the sample
#       4. Fields typed Document get a nested summary built from the
#          documents where the value is a (non-array) sub-document
#
# LIMITATIONS:
# ------------
#   - Arrays of sub-documents are reported as Array<Document>, their
#     element structure is not expanded.
#
# ==============================================

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Sequence

from mongoshape.config import DEFAULT_MAX_DEPTH, get_config
from mongoshape.errors import DepthExceededError
from .field_stats import FieldStat, SchemaSummary
from .type_classifier import TypeClassifier


logger = logging.getLogger(__name__)


class SchemaAggregator:
    """
    Infers a structural summary from a sample of documents.
    """

    def __init__(self, max_examples: int = 3, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            max_examples: Distinct example values kept per field
            max_depth: Deepest sub-document / array nesting accepted
        """
        self.max_examples = max_examples
        self.max_depth = max_depth

    def infer(self, documents: Sequence[Mapping]) -> SchemaSummary:
        """
        Build the schema summary for a sample of documents.

        Args:
            documents: The sampled documents, in traversal order

        Returns:
            A SchemaSummary with fields in first-seen order

        Raises:
            DepthExceededError: if a document nests deeper than max_depth
        """
        try:
            return self._infer_level(documents, depth=0)
        except DepthExceededError:
            raise
        except RecursionError:
            # sample comparison walks values before the nesting check reaches them
            raise DepthExceededError(self.max_depth) from None

    def _infer_level(self, documents: Sequence[Any], depth: int) -> SchemaSummary:
        if depth > self.max_depth:
            raise DepthExceededError(self.max_depth)

        sample = self._usable_documents(documents)
        if not sample:
            return SchemaSummary()

        field_map: Dict[str, FieldStat] = {}

        # Step 1: types, presence and examples
        for document in sample:
            for key, value in document.items():
                stat = field_map.get(key)
                if stat is None:
                    stat = FieldStat(name=key, max_samples=self.max_examples)
                    field_map[key] = stat
                type_tag = TypeClassifier.classify(value, max_depth=self.max_depth - depth)
                stat.observe(value, type_tag)

        # Step 2: nullability (absent from at least one document)
        for stat in field_map.values():
            stat.total_documents = len(sample)
            stat.nullable = any(stat.name not in document for document in sample)

        # Step 3: nested sub-documents
        for stat in field_map.values():
            if TypeClassifier.DOCUMENT not in stat.types:
                continue
            nested_documents = self._nested_documents(sample, stat.name)
            if nested_documents:
                stat.nested_schema = self._infer_level(nested_documents, depth + 1)

        logger.debug(
            "Inferred %d fields from %d documents at depth %d",
            len(field_map), len(sample), depth
        )
        return SchemaSummary(fields=list(field_map.values()))

    @staticmethod
    def _nested_documents(documents: List[Mapping], key: str) -> List[Mapping]:
        """Collect the values of ``key`` that are themselves sub-documents."""
        return [
            document[key]
            for document in documents
            if isinstance(document.get(key), Mapping)
        ]

    @staticmethod
    def _usable_documents(documents: Iterable[Any]) -> List[Mapping]:
        if not documents:
            return []

        # cursors and generators can only be walked once
        candidates = list(documents)
        usable = [document for document in candidates if isinstance(document, Mapping)]
        skipped = len(candidates) - len(usable)
        if skipped:
            logger.warning("Skipped %d sampled values that are not documents", skipped)
        return usable


def infer_schema(documents: Sequence[Mapping]) -> SchemaSummary:
    """
    Infer a schema summary using the configured limits.

    Args:
        documents: Sampled documents supplied by the caller

    Returns:
        SchemaSummary for the sample
    """
    config = get_config()
    aggregator = SchemaAggregator(
        max_examples=config.inference.max_examples,
        max_depth=config.max_nesting_depth
    )
    return aggregator.infer(documents)
