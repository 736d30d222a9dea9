"""
Module: patients_api.client

This module contains the PatientClient class, a simple client for the Patient
CRUD API served by :mod:`patients_api.app`.

Usage:

    client = PatientClient(base_url="http://localhost:3000")

    created = client.create_patient(
        {
            "resourceType": "Patient",
            "name": [{"given": ["Ana"], "family": "Souza"}],
            "gender": "female",
        }
    )
    patient_id = int(created["identifier"][0]["value"])

    client.get_patient(patient_id)
    client.delete_patient(patient_id)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, cast

import requests

from fhir import Patient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class PatientApiError(Exception):
    """
    Raised when the Patient API answers with a non-2xx status.

    :param status_code: HTTP status code of the response.
    :param message: The ``message`` field of the error body, or ``HTTP <status>``.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class PatientClient:
    """
    A client for the Patient CRUD API.

    Every method returns the decoded JSON body, or ``None`` for 204 responses,
    and raises :class:`PatientApiError` for error responses.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, *, timeout: int = 10) -> None:
        """
        :param base_url: Scheme, host and port of the API, without a trailing path.
        :param timeout: Timeout in seconds for HTTP calls.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self, method: str, path: str, *, json: Any | None = None
    ) -> Any | None:
        url = f"{self.base_url}{path}"
        response = requests.request(
            method,
            url,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            json=json,
            timeout=self.timeout,
        )

        if response.status_code == 204:
            return None

        try:
            data = response.json()
        except requests.exceptions.JSONDecodeError:
            data = None

        if not response.ok:
            message = (
                data.get("message") if isinstance(data, dict) else None
            ) or f"HTTP {response.status_code}"
            logger.error("%s %s failed: %s", method, url, message)
            raise PatientApiError(response.status_code, message)

        return data

    def create_patient(self, patient: Patient | dict[str, Any]) -> Patient:
        created = self._request("POST", "/Patient", json=patient)
        return cast("Patient", created)

    def get_patient(self, patient_id: int) -> Patient:
        return cast("Patient", self._request("GET", f"/Patient/{patient_id}"))

    def update_patient(
        self, patient_id: int, patient: Patient | dict[str, Any]
    ) -> Patient:
        updated = self._request("PUT", f"/Patient/{patient_id}", json=patient)
        return cast("Patient", updated)

    def delete_patient(self, patient_id: int) -> None:
        self._request("DELETE", f"/Patient/{patient_id}")

    def get_patient_ids(self) -> list[int]:
        """
        Fetch the ids of every stored patient.

        :returns: Ascending ids; an empty list when the server reports no content.
        """
        ids = self._request("GET", "/PatientIDs")
        return cast("list[int]", ids) if ids else []

    def get_patients(self, patient_ids: Iterable[int]) -> list[Patient]:
        """
        Load several patients, skipping any that fail to load.

        :param patient_ids: Ids to load, in the order they should be returned.
        :returns: The patients that could be loaded.
        """
        loaded: list[Patient] = []
        for patient_id in patient_ids:
            try:
                loaded.append(self.get_patient(patient_id))
            except (PatientApiError, requests.RequestException) as err:
                logger.error("Error loading patient %s: %s", patient_id, err)
        return loaded
