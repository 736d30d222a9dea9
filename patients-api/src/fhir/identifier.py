"""FHIR Identifier type."""

from typing import NotRequired, TypedDict


class Identifier(TypedDict):
    value: str
    system: NotRequired[str]
