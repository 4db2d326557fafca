import datetime
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from bson import json_util
from bson.errors import BSONError

from mongoshape.config import DEFAULT_MAX_DEPTH, get_config
from mongoshape.errors import DepthExceededError, InvalidShapeError, MalformedInputError
from .coercion import CoercionPolicy, StringCoercer


logger = logging.getLogger(__name__)

# $date values come back as aware UTC, like converted date strings
PAYLOAD_JSON_OPTIONS = json_util.RELAXED_JSON_OPTIONS.with_options(
    tz_aware=True,
    tzinfo=datetime.timezone.utc
)


def parse_payload(text: str) -> Any:
    """
    Parse a textual payload (JSON or MongoDB Extended JSON).

    Raises:
        MalformedInputError: with the parser's reason when the text is not valid
    """
    try:
        return json_util.loads(text, json_options=PAYLOAD_JSON_OPTIONS)
    except RecursionError:
        raise MalformedInputError("payload nests too deeply to parse", text) from None
    except (BSONError, ValueError, TypeError) as exc:
        raise MalformedInputError(str(exc), text) from exc


class ValueNormalizer:
    """
    Rewrites filter / update / document trees so that string forms of
    ObjectIds and ISO dates become real ObjectId / datetime values.
    """

    def __init__(
        self,
        policy: Union[CoercionPolicy, str, None] = CoercionPolicy.AUTO,
        max_depth: int = DEFAULT_MAX_DEPTH
    ):
        self.policy = CoercionPolicy.parse(policy)
        self.max_depth = max_depth

    def normalize_payload(self, payload: Any) -> Union[dict, list]:
        """
        Normalize a caller-supplied payload.

        Args:
            payload: A dict/list tree, its JSON text, or None

        Returns:
            A new normalized dict or list; None yields an empty dict

        Raises:
            MalformedInputError: text that does not parse
            InvalidShapeError: anything other than an object or array
            DepthExceededError: nesting deeper than max_depth
        """
        if payload is None:
            return {}

        if isinstance(payload, (str, bytes, bytearray)):
            payload = parse_payload(payload)

        if not isinstance(payload, (Mapping, list, tuple)):
            raise InvalidShapeError(
                f"Payload must be an object or an array, got {type(payload).__name__}"
            )

        return self.normalize(payload)

    def normalize(self, value: Any, field_name: Optional[str] = None) -> Any:
        """
        Normalize one value of a tree.

        Args:
            value: Any document value
            field_name: Key the value is stored under, used to decide
                whether a 24-hex string is an ObjectId in AUTO mode

        Returns:
            The normalized value (containers are always new objects)
        """
        return self._normalize(value, field_name, 0)

    def _normalize(self, value: Any, field_name: Optional[str], depth: int) -> Any:
        if isinstance(value, str):
            return StringCoercer.coerce(value, field_name, self.policy)

        if isinstance(value, Mapping):
            self._check_depth(depth)
            normalized = {}
            for key, item in value.items():
                context = key if isinstance(key, str) else None
                normalized[key] = self._normalize(item, context, depth + 1)
            return normalized

        if isinstance(value, (list, tuple)):
            self._check_depth(depth)
            # elements keep the array's own field name as context
            return [self._normalize(item, field_name, depth + 1) for item in value]

        return value

    def _check_depth(self, depth: int) -> None:
        if depth >= self.max_depth:
            logger.warning("Rejecting payload nested deeper than %d levels", self.max_depth)
            raise DepthExceededError(self.max_depth)


def normalize_value(
    value: Any,
    policy: Union[CoercionPolicy, str, None] = None
) -> Union[dict, list]:
    """
    Normalize a filter, update, or document payload.

    Args:
        value: The payload as a tree or as JSON text
        policy: "auto", "none" or "force"; defaults to the configured mode

    Returns:
        The normalized tree
    """
    config = get_config()
    if policy is None:
        policy = config.normalization.default_policy
    normalizer = ValueNormalizer(policy=policy, max_depth=config.max_nesting_depth)
    return normalizer.normalize_payload(value)
