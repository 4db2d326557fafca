import datetime
from collections.abc import Mapping
from typing import Any

from bson import Decimal128, ObjectId

from mongoshape.config import DEFAULT_MAX_DEPTH
from mongoshape.errors import DepthExceededError


class _Missing:
    """Marker for a field that is absent from a document."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class TypeClassifier:
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT_ID = "ObjectId"
    DATE = "Date"
    ARRAY = "Array"
    MIXED = "mixed"
    DOCUMENT = "Document"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"

    @classmethod
    def classify(cls, value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        return cls._classify(value, 0, max_depth)

    @classmethod
    def array_tag(cls, element_tag: str) -> str:
        return f"{cls.ARRAY}<{element_tag}>"

    @classmethod
    def _classify(cls, value: Any, depth: int, max_depth: int) -> str:
        if value is None:
            return cls.NULL

        if value is MISSING:
            return cls.UNDEFINED

        if isinstance(value, ObjectId):
            return cls.OBJECT_ID

        if isinstance(value, datetime.datetime):
            return cls.DATE

        if isinstance(value, (list, tuple)):
            if depth >= max_depth:
                raise DepthExceededError(max_depth)
            if not value:
                return cls.ARRAY

            element_tags = {cls._classify(item, depth + 1, max_depth) for item in value}
            if len(element_tags) == 1:
                return cls.array_tag(element_tags.pop())
            return cls.array_tag(cls.MIXED)

        if isinstance(value, Mapping):
            return cls.DOCUMENT

        # bool is a subclass of int, so it has to be checked first
        if isinstance(value, bool):
            return cls.BOOLEAN

        if isinstance(value, (int, float, Decimal128)):
            return cls.NUMBER

        if isinstance(value, str):
            return cls.STRING

        return type(value).__name__
