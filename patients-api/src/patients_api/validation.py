"""
Structural validation of candidate Patient resources.

The checks are deliberately shallow: they only look at the fields the store
relies on and leave everything else (``birthDate``, ``telecom``, ``address``)
to pass through untouched.
"""

from dataclasses import dataclass
from typing import Any

from fhir import GENDERS

from patients_api.common.common import is_absent


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a candidate resource.

    :param valid: ``True`` if every check passed.
    :param error: Human-readable reason for the first failed check.
    """

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


GENDER_ERROR = f"Gender must be one of: {', '.join(GENDERS)}"


def validate_patient(candidate: Any) -> ValidationResult:
    """
    Validate a candidate Patient resource received on create or update.

    A field counts as present unless :func:`~patients_api.common.common.is_absent`
    says otherwise, so empty lists and objects are checked like any other value.
    Neither ``name`` nor ``gender`` is required.

    :param candidate: The decoded JSON request body.
    :returns: A :class:`ValidationResult` describing the first failed check.
    """
    # A top-level array is structured data; it fails on its missing resourceType.
    if not isinstance(candidate, (dict, list)):
        return ValidationResult.fail("Patient must be a valid object")

    if not isinstance(candidate, dict) or candidate.get("resourceType") != "Patient":
        return ValidationResult.fail('Resource type must be "Patient"')

    identifier = candidate.get("identifier")
    if not is_absent(identifier) and not isinstance(identifier, list):
        return ValidationResult.fail("Identifier must be an array")

    name = candidate.get("name")
    if not is_absent(name) and not isinstance(name, list):
        return ValidationResult.fail("Name must be an array")

    gender = candidate.get("gender")
    if not is_absent(gender) and gender not in GENDERS:
        return ValidationResult.fail(GENDER_ERROR)

    return ValidationResult.ok()
