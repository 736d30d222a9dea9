"""
Shared lightweight types and helpers used across the patients API.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, TypeAlias

# This project uses JSON request/response bodies as strings in the controller layer.
# The alias is used to make intent clearer in function signatures.
json_str: TypeAlias = str

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass
class FlaskResponse:
    """
    Lightweight response container returned by controller entry points.

    This mirrors the minimal set of fields used by the surrounding web framework.

    :param status_code: HTTP status code for the response (e.g., 200, 400, 404).
    :param data: Response body as text, if any.
    :param headers: Response headers, if any.
    """

    status_code: int
    data: json_str | None = None
    headers: dict[str, str] | None = None


def to_json(value: Any) -> json_str:
    """
    Serialise a value to compact JSON, keeping key order and non-ASCII text.

    :param value: Any JSON-serialisable value.
    :returns: The JSON text.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def parse_leading_int(value: Any) -> int | None:
    """
    Read the integer at the start of a value's decimal text.

    Leading whitespace and a single sign are accepted, and anything after the
    leading run of digits is ignored, so ``"12abc"`` reads as ``12`` and
    ``2.7`` reads as ``2``.

    :param value: A string, a number, or ``None``.
    :returns: The parsed integer, or ``None`` if the text does not start with
        digits.
    """
    if value is None or isinstance(value, bool):
        return None

    match = _LEADING_INT.match(str(value))
    if match is None:
        return None

    return int(match.group(1))


def parse_patient_id(value: str | int) -> int | None:
    """
    Parse a patient id taken from a URL path.

    :param value: Raw path segment.
    :returns: The id if it is a positive integer, otherwise ``None``.
    """
    patient_id = parse_leading_int(value)
    if patient_id is None or patient_id <= 0:
        return None
    return patient_id


def is_absent(value: Any) -> bool:
    """
    Whether a decoded JSON field should be treated as not supplied.

    ``null``, ``false``, ``""``, ``0`` and ``NaN`` are absent. Every other value,
    including an empty list or object, is present.

    :param value: A decoded JSON value, or ``None`` for a missing key.
    :returns: ``True`` if the value counts as absent.
    """
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False
