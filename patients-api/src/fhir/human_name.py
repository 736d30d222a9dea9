"""FHIR HumanName type."""

from typing import NotRequired, TypedDict


class HumanName(TypedDict):
    given: list[str]
    family: str
    use: NotRequired[str]
