"""FHIR Address type."""

from typing import TypedDict


class Address(TypedDict, total=False):
    line: list[str]
    city: str
    state: str
    postalCode: str
