"""FHIR data types and resources."""

from fhir.address import Address
from fhir.contact_point import ContactPoint
from fhir.human_name import HumanName
from fhir.identifier import Identifier
from fhir.patient import GENDERS, Patient

__all__ = [
    "GENDERS",
    "Address",
    "ContactPoint",
    "HumanName",
    "Identifier",
    "Patient",
]
