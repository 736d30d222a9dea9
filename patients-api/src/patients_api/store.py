"""
In-memory storage for Patient resources.

A :class:`PatientStore` lives for as long as the Flask app that owns it. Nothing
is persisted; restarting the process discards every record.
"""

from collections.abc import Mapping
from typing import Any

from fhir import Patient

from patients_api.resource import build_patient_resource


class PatientStore:
    """
    Maps positive integer ids to Patient records and owns id assignment.

    Ids start at 1 and are never reused, even after a delete.
    """

    def __init__(self) -> None:
        self._patients: dict[int, Patient] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._patients)

    def __contains__(self, patient_id: object) -> bool:
        return patient_id in self._patients

    def create(self, data: Mapping[str, Any]) -> tuple[int, Patient]:
        """
        Store a new record under the next free id.

        The counter only advances once the record has been built, so a body
        that cannot be turned into a record does not consume an id.

        :param data: A validated request body.
        :returns: The assigned id and the stored record.
        """
        patient_id = self._next_id
        patient = build_patient_resource(data, patient_id)
        self._patients[patient_id] = patient
        self._next_id += 1
        return patient_id, patient

    def get(self, patient_id: int) -> Patient | None:
        return self._patients.get(patient_id)

    def put(self, patient_id: int, data: Mapping[str, Any]) -> Patient:
        """
        Replace (or insert) the record stored under ``patient_id``.

        Inserting above the counter moves the counter past the new key so that a
        later create never lands on an id that is already in use.

        :param patient_id: The store key taken from the request path.
        :param data: A validated request body.
        :returns: The stored record.
        """
        patient = build_patient_resource(data, patient_id)
        self._patients[patient_id] = patient
        self._next_id = max(self._next_id, patient_id + 1)
        return patient

    def delete(self, patient_id: int) -> bool:
        """Remove a record, returning whether it existed."""
        return self._patients.pop(patient_id, None) is not None

    def list_ids(self) -> list[int]:
        return sorted(self._patients)
