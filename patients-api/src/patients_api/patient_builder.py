"""
Build Patient resources from form input.

Form-driven callers (the CLI and the browser UI) hold patients to stricter
rules than the server: a given name, a family name and a gender are all
required before anything is sent.
"""

from collections.abc import Mapping
from typing import Any, cast

from fhir import ContactPoint, Patient

from patients_api.validation import ValidationResult, validate_patient


def build_from_form_data(
    form: Mapping[str, str | None], patient_id: int | None = None
) -> Patient:
    """
    Build a Patient resource from flat form fields.

    Recognised fields: ``active`` (``"on"`` when ticked), ``given``, ``family``,
    ``gender``, ``birthDate``, ``phone``, ``email`` and ``address``.

    :param form: Field name to submitted value.
    :param patient_id: Existing id to carry in ``identifier``, if editing.
    :returns: The Patient resource.
    """
    patient: dict[str, Any] = {
        "resourceType": "Patient",
        "active": form.get("active") == "on",
        "name": [{"given": [form.get("given")], "family": form.get("family")}],
        "gender": form.get("gender"),
    }

    if patient_id:
        patient["identifier"] = [{"value": str(patient_id)}]

    if form.get("birthDate"):
        patient["birthDate"] = form["birthDate"]

    telecom = _contact_points(form)
    if telecom:
        patient["telecom"] = telecom

    if form.get("address"):
        patient["address"] = [{"line": [form["address"]]}]

    return cast("Patient", patient)


def _contact_points(form: Mapping[str, str | None]) -> list[ContactPoint]:
    telecom: list[ContactPoint] = []
    for system in ("phone", "email"):
        value = form.get(system)
        if value:
            telecom.append({"system": system, "value": value})
    return telecom


def create_template() -> Patient:
    """Return a complete example Patient, used to seed the JSON editor."""
    return {
        "resourceType": "Patient",
        "active": True,
        "name": [{"given": ["João"], "family": "Silva"}],
        "telecom": [
            {"system": "phone", "value": "(11) 99999-9999"},
            {"system": "email", "value": "joao.silva@email.com"},
        ],
        "gender": "male",
        "birthDate": "1990-01-01",
        "address": [
            {
                "line": ["Rua das Flores, 123"],
                "city": "Porto Alegre",
                "state": "RS",
                "postalCode": "90000-000",
            }
        ],
    }


def validate(patient: Any) -> ValidationResult:
    """
    Apply the form rules on top of the server's structural checks.

    :param patient: Candidate Patient resource.
    :returns: A :class:`~patients_api.validation.ValidationResult`.
    """
    result = validate_patient(patient)
    if not result.valid:
        return result

    names = patient.get("name")
    if not names or not isinstance(names, list):
        return ValidationResult.fail("Patient must have at least one name")

    name = names[0]
    if not isinstance(name, dict):
        return ValidationResult.fail("Patient must have at least one name")

    given = name.get("given")
    if not isinstance(given, list) or not any(given):
        return ValidationResult.fail("Patient name must include given name(s)")

    if not name.get("family"):
        return ValidationResult.fail("Patient name must include family name")

    gender = patient.get("gender")
    if not gender:
        return ValidationResult.fail("Patient must have gender specified")

    return ValidationResult.ok()
