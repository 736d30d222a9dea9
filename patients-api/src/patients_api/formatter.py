"""Display strings derived from Patient resources."""

from collections.abc import Mapping
from datetime import date
from typing import Any

NOT_PROVIDED = "Not provided"
NAME_NOT_PROVIDED = "Name not provided"
ADDRESS_NOT_PROVIDED = "Address not provided"

GENDER_LABELS = {
    "male": "Male",
    "female": "Female",
    "other": "Other",
    "unknown": NOT_PROVIDED,
}


def format_date(value: str | None) -> str:
    """
    Render an ISO ``YYYY-MM-DD`` date as ``DD/MM/YYYY``.

    Values that are not ISO dates are returned unchanged.
    """
    if not value:
        return NOT_PROVIDED
    try:
        return date.fromisoformat(value).strftime("%d/%m/%Y")
    except ValueError:
        return value


def format_gender(gender: str | None) -> str:
    if gender is None:
        return NOT_PROVIDED
    return GENDER_LABELS.get(gender, gender)


def get_patient_name(patient: Mapping[str, Any]) -> str:
    names = patient.get("name")
    if not names:
        return NAME_NOT_PROVIDED

    name = names[0]
    given = " ".join(part for part in name.get("given") or [] if part)
    family = name.get("family") or ""

    return f"{given} {family}".strip() or NAME_NOT_PROVIDED


def get_contact_info(patient: Mapping[str, Any], system: str) -> str | None:
    """Return the value of the first ``telecom`` entry for ``system``, if any."""
    for contact in patient.get("telecom") or []:
        if contact.get("system") == system:
            value: str | None = contact.get("value")
            return value
    return None


def get_address(patient: Mapping[str, Any]) -> str:
    addresses = patient.get("address")
    if not addresses:
        return ADDRESS_NOT_PROVIDED

    address = addresses[0]
    parts = [*(address.get("line") or [])]
    parts.extend(
        address[key] for key in ("city", "state", "postalCode") if address.get(key)
    )

    return ", ".join(parts) or ADDRESS_NOT_PROVIDED


def get_patient_id(patient: Mapping[str, Any]) -> str:
    identifiers = patient.get("identifier") or [{}]
    return str(identifiers[0].get("value", ""))


def format_patient(patient: Mapping[str, Any]) -> str:
    """
    Render a multi-line summary of a patient, as shown in the patient list.

    Phone and email lines are only included when present.
    """
    lines = [
        f"{get_patient_name(patient)} (ID: {get_patient_id(patient)})",
        f"  Gender: {format_gender(patient.get('gender'))}",
        f"  Birth date: {format_date(patient.get('birthDate'))}",
    ]

    phone = get_contact_info(patient, "phone")
    if phone:
        lines.append(f"  Phone: {phone}")

    email = get_contact_info(patient, "email")
    if email:
        lines.append(f"  Email: {email}")

    lines.append(f"  Address: {get_address(patient)}")
    lines.append(f"  Status: {'Active' if patient.get('active') else 'Inactive'}")

    return "\n".join(lines)
