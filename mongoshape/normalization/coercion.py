import datetime
import logging
import re
from enum import Enum
from typing import Any, Optional, Union

from bson import ObjectId

from mongoshape.errors import InvalidPolicyError


logger = logging.getLogger(__name__)


class CoercionPolicy(Enum):
    """
    How aggressively 24-hex strings are turned into ObjectIds.

    - AUTO: only when the field name looks like an identifier
    - NONE: never (timestamps are still converted)
    - FORCE: always
    """
    AUTO = "auto"
    NONE = "none"
    FORCE = "force"

    @classmethod
    def parse(cls, value: Union["CoercionPolicy", str, None]) -> "CoercionPolicy":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.AUTO
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(policy.value for policy in cls)
            raise InvalidPolicyError(
                f"Unknown ObjectId mode {value!r}, expected one of: {valid}"
            ) from None


class StringCoercer:
    OBJECT_ID_PATTERN = re.compile(r'^[0-9a-fA-F]{24}$')

    ISO_DATE_PATTERN = re.compile(
        r'^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]{1,3})?Z$'
    )

    ISO_DATE_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
    ]

    ISODATE_PREFIX = "ISODate("
    ISODATE_SUFFIX = ")"

    @classmethod
    def coerce(cls, value: str, field_name: Optional[str], policy: CoercionPolicy) -> Any:
        """
        Convert one string according to the ObjectId / date rules.

        Order: 24-hex identifier, then plain ISO-8601, then ISODate("...").
        Anything unrecognized is returned unchanged.
        """
        if cls.is_object_id_string(value):
            if cls.should_convert_object_id(field_name, policy):
                return ObjectId(value)
            return value

        if cls.is_iso_date_string(value):
            parsed = cls.parse_iso_date(value)
            return value if parsed is None else parsed

        inner = cls.unwrap_isodate(value)
        if inner is not None and cls.is_iso_date_string(inner):
            parsed = cls.parse_iso_date(inner)
            return value if parsed is None else parsed

        return value

    @classmethod
    def should_convert_object_id(cls, field_name: Optional[str], policy: CoercionPolicy) -> bool:
        if policy is CoercionPolicy.FORCE:
            return True
        if policy is CoercionPolicy.AUTO:
            return cls.is_object_id_field(field_name)
        return False

    @classmethod
    def is_object_id_string(cls, value: str) -> bool:
        return bool(cls.OBJECT_ID_PATTERN.fullmatch(value))

    @classmethod
    def is_iso_date_string(cls, value: str) -> bool:
        return bool(cls.ISO_DATE_PATTERN.fullmatch(value))

    @classmethod
    def is_object_id_field(cls, field_name: Optional[str]) -> bool:
        """_id, id, userId, user_id, ... (case-insensitive)."""
        if not field_name:
            return False
        lowered = field_name.lower()
        # "_id" also ends in "id"
        return lowered == "_id" or lowered == "id" or lowered.endswith("id")

    @classmethod
    def unwrap_isodate(cls, value: str) -> Optional[str]:
        """
        Return the text inside ISODate(...), without surrounding quotes.
        Returns None when the value is not wrapped.
        """
        if not (value.startswith(cls.ISODATE_PREFIX) and value.endswith(cls.ISODATE_SUFFIX)):
            return None

        inner = value[len(cls.ISODATE_PREFIX):-len(cls.ISODATE_SUFFIX)].strip()
        if len(inner) >= 2 and inner[0] == inner[-1] and inner[0] in ("'", '"'):
            inner = inner[1:-1]
        return inner

    @classmethod
    def parse_iso_date(cls, value: str) -> Optional[datetime.datetime]:
        for fmt in cls.ISO_DATE_FORMATS:
            try:
                parsed = datetime.datetime.strptime(value, fmt)
            except ValueError:
                continue
            return parsed.replace(tzinfo=datetime.timezone.utc)

        logger.warning("Leaving %r unconverted: not a valid calendar date", value)
        return None

