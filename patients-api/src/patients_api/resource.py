"""Canonical Patient record construction."""

from collections.abc import Mapping
from typing import Any, cast

from fhir import Identifier, Patient

from patients_api.common.common import is_absent

# Fields owned by the server; never copied from the submitted body.
SERVER_FIELDS = frozenset({"resourceType", "identifier"})


def build_patient_resource(data: Mapping[str, Any], patient_id: int) -> Patient:
    """
    Build the record stored under ``patient_id`` from a validated request body.

    The first identifier entry always carries the store id as a decimal string.
    Any further identifier entries and every other submitted field are kept as
    submitted, in submission order.

    :param data: A request body that has passed
        :func:`~patients_api.validation.validate_patient`.
    :param patient_id: The store key.
    :returns: The record to store and return to the caller.
    :raises TypeError: If ``identifier`` is not a list or its first entry is not an
        object.
    """
    canonical_id = str(patient_id)

    resource: dict[str, Any] = {
        "resourceType": "Patient",
        "identifier": _canonical_identifiers(data.get("identifier"), canonical_id),
    }
    for key, value in data.items():
        if key not in SERVER_FIELDS:
            resource[key] = value

    return cast("Patient", resource)


def _canonical_identifiers(submitted: Any, canonical_id: str) -> list[Identifier]:
    if is_absent(submitted) or submitted == []:
        return [{"value": canonical_id}]

    if not isinstance(submitted, list):
        raise TypeError(f"Identifier must be a list, got {type(submitted).__name__}")

    first, *rest = submitted
    if not isinstance(first, Mapping):
        raise TypeError(
            f"Identifier entry must be an object, got {type(first).__name__}"
        )

    return [cast("Identifier", {**first, "value": canonical_id}), *rest]
