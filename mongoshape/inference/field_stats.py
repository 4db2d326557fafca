# ==============================================
# FieldStat / SchemaSummary
# ==============================================
#
# PURPOSE:
#   Data classes that hold the observed statistics for one field
#   and the ordered list of fields for one level of a sample.
#   These are the OUTPUT of the SchemaAggregator.
#
# CLASS: FieldStat (dataclass)
# ----------------------------
#   Attributes:
#   -----------
#   - name: str                       → Field name at this nesting level
#   - types: list[str]                → Distinct type tags, first-seen order
#   - nullable: bool                  → Absent from at least one document
#   - presence_count: int             → How many documents contain the field
#   - total_documents: int            → Size of the sample at this level
#   - samples: list                   → Up to max_samples distinct raw values
#   - nested_schema: SchemaSummary    → Only for fields typed Document
#
#   Computed Properties:
#   --------------------
#   - prevalence -> float             → presence_count / total_documents
#   - prevalence_percent -> int       → Nearest integer percent (half up)
#   - examples -> list                → Rendered samples (see samples.py)
#
#   Methods:
#   --------
#   - observe(value, type_tag) -> None
#   - to_dict() -> dict
#
# CLASS: SchemaSummary (dataclass)
# --------------------------------
#   - fields: list[FieldStat]         → First-seen order, never sorted
#   - get(name) / field_names / to_dict() / to_json()
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from bson import json_util

from .samples import render_example, values_equal


@dataclass
class FieldStat:
    """
    Statistics for a single field across one sample of documents.
    """

    name: str
    types: List[str] = field(default_factory=list)
    nullable: bool = False

    # --- Counters ---
    presence_count: int = 0
    total_documents: int = 0

    # --- Examples ---
    samples: List[Any] = field(default_factory=list)
    max_samples: int = 3

    nested_schema: Optional["SchemaSummary"] = None

    def observe(self, value: Any, type_tag: str) -> None:
        """
        Record one occurrence of the field.

        Args:
            value: The raw field value
            type_tag: Tag produced by the TypeClassifier for the value
        """
        self.presence_count += 1

        if type_tag not in self.types:
            self.types.append(type_tag)

        if len(self.samples) < self.max_samples and not any(
            values_equal(sample, value) for sample in self.samples
        ):
            self.samples.append(value)

    @property
    def prevalence(self) -> float:
        """Fraction of sampled documents that contain the field."""
        if self.total_documents == 0:
            return 0.0
        return self.presence_count / self.total_documents

    @property
    def prevalence_percent(self) -> int:
        """Prevalence rounded to the nearest whole percent, halves rounding up."""
        if self.total_documents == 0:
            return 0
        # integer arithmetic keeps 0.5 boundaries exact
        return (self.presence_count * 200 + self.total_documents) // (2 * self.total_documents)

    @property
    def examples(self) -> List[Any]:
        return [render_example(sample) for sample in self.samples]

    def to_dict(self) -> Dict[str, Any]:
        """
        Render the field in the output shape:
        {name, types, nullable, prevalence, examples, nestedSchema?}
        """
        result: Dict[str, Any] = {
            "name": self.name,
            "types": list(self.types),
            "nullable": self.nullable,
            "prevalence": f"{self.prevalence_percent}%",
            "examples": self.examples,
        }
        if self.nested_schema is not None:
            result["nestedSchema"] = self.nested_schema.to_dict()
        return result


@dataclass
class SchemaSummary:
    """Ordered field statistics for one level of a document sample."""

    fields: List[FieldStat] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[FieldStat]:
        return iter(self.fields)

    @property
    def field_names(self) -> List[str]:
        return [field_stat.name for field_stat in self.fields]

    def get(self, name: str) -> Optional[FieldStat]:
        """Return the FieldStat called ``name``, or None if it was never observed."""
        for field_stat in self.fields:
            if field_stat.name == name:
                return field_stat
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"fields": [field_stat.to_dict() for field_stat in self.fields]}

    def to_json(self, indent: int = 2) -> str:
        return json_util.dumps(self.to_dict(), indent=indent)
