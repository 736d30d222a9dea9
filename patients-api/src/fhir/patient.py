"""FHIR Patient resource."""

from typing import Literal, NotRequired, TypeAlias, TypedDict

from fhir.address import Address
from fhir.contact_point import ContactPoint
from fhir.human_name import HumanName
from fhir.identifier import Identifier

Gender: TypeAlias = Literal["male", "female", "other", "unknown"]

GENDERS: tuple[Gender, ...] = ("male", "female", "other", "unknown")


class Patient(TypedDict):
    resourceType: Literal["Patient"]
    identifier: NotRequired[list[Identifier]]
    name: NotRequired[list[HumanName]]
    gender: NotRequired[Gender]
    active: NotRequired[bool]
    birthDate: NotRequired[str]
    telecom: NotRequired[list[ContactPoint]]
    address: NotRequired[list[Address]]
