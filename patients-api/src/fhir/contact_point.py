"""FHIR ContactPoint type."""

from typing import TypedDict


class ContactPoint(TypedDict):
    system: str
    value: str
