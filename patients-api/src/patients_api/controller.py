"""
Controller layer for the Patient CRUD operations.

Each entry point takes the raw path id and/or decoded request body, talks to the
:class:`~patients_api.store.PatientStore` and returns a
:class:`~patients_api.common.common.FlaskResponse`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http.client import responses as http_responses
from typing import TYPE_CHECKING, Any

from patients_api.common.common import (
    FlaskResponse,
    is_absent,
    parse_leading_int,
    parse_patient_id,
    to_json,
)
from patients_api.validation import validate_patient

if TYPE_CHECKING:
    from patients_api.store import PatientStore

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Patient ID must be a positive integer"
ID_MISMATCH_MESSAGE = "Patient ID in body must match URL parameter"
INVALID_FORMAT_MESSAGE = "Invalid patient data format"

JSON_HEADERS = {"Content-Type": "application/json"}

# Reason phrases used as the "error" category. 422 is pinned because newer
# interpreters report it as "Unprocessable Content".
ERROR_CATEGORIES = {
    400: "Bad Request",
    404: "Not Found",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


@dataclass
class RequestError(Exception):
    """
    Raised (and handled) when there is a problem with the incoming request.

    Instances of this exception are caught by controller entry points and converted
    into an appropriate :class:`FlaskResponse`.

    :param status_code: HTTP status code that should be returned.
    :param message: Human-readable error message.
    """

    status_code: int
    message: str

    def __str__(self) -> str:
        """
        Coercing this exception to a string returns the error message.

        :returns: The error message.
        """
        return self.message

    @property
    def error(self) -> str:
        """The standard reason phrase for :attr:`status_code`."""
        return error_category(self.status_code)

    def to_response(self) -> FlaskResponse:
        return error_response(self.status_code, self.message)


def error_category(status_code: int) -> str:
    return ERROR_CATEGORIES.get(status_code) or http_responses.get(
        status_code, "Error"
    )


def error_response(status_code: int, message: str) -> FlaskResponse:
    """
    Build the uniform ``{"error": ..., "message": ...}`` error response.

    :param status_code: HTTP status code.
    :param message: Human-readable error message.
    :returns: A JSON :class:`FlaskResponse`.
    """
    body = {"error": error_category(status_code), "message": message}
    return FlaskResponse(
        status_code=status_code, data=to_json(body), headers=dict(JSON_HEADERS)
    )


def _json_response(
    status_code: int, body: Any, headers: dict[str, str] | None = None
) -> FlaskResponse:
    return FlaskResponse(
        status_code=status_code,
        data=to_json(body),
        headers={**JSON_HEADERS, **(headers or {})},
    )


class PatientController:
    """
    Implements create, read, update, delete and id listing for Patient resources.

    Entry points:
        - ``create(body) -> FlaskResponse``
        - ``read(raw_id) -> FlaskResponse``
        - ``update(raw_id, body) -> FlaskResponse``
        - ``delete(raw_id) -> FlaskResponse``
        - ``list_ids() -> FlaskResponse``
    """

    def __init__(self, store: PatientStore) -> None:
        self.store = store

    def create(self, body: Any) -> FlaskResponse:
        """
        Validate ``body`` and store it under a newly assigned id.

        :param body: Decoded JSON request body, or ``None`` if the body was empty.
        :returns: 201 with a ``Location`` header and the stored record, 400 if
            validation fails, 422 if the body cannot be stored.
        """
        try:
            self._validate(body)
        except RequestError as err:
            return err.to_response()

        try:
            patient_id, patient = self.store.create(body)
        except Exception:
            logger.exception("Failed to create patient from request body")
            return error_response(422, INVALID_FORMAT_MESSAGE)

        logger.info("Created Patient/%s", patient_id)
        return _json_response(
            201, patient, headers={"Location": f"/Patient/{patient_id}"}
        )

    def read(self, raw_id: str) -> FlaskResponse:
        """
        Return the record stored under ``raw_id``.

        :param raw_id: Path segment from the request URL.
        :returns: 200 with the record, 400 for a malformed id, 404 if absent.
        """
        try:
            patient_id = self._parse_id(raw_id)
            patient = self.store.get(patient_id)
            if patient is None:
                raise self._not_found(patient_id)
        except RequestError as err:
            return err.to_response()
        except Exception:
            logger.exception("Failed to read Patient/%s", raw_id)
            return error_response(500, "Error retrieving patient")

        return _json_response(200, patient)

    def update(self, raw_id: str, body: Any) -> FlaskResponse:
        """
        Replace the record stored under ``raw_id`` with ``body``.

        An identifier value in the body that reads as an integer must match the
        id in the path. The record is inserted if it does not exist yet.

        :param raw_id: Path segment from the request URL.
        :param body: Decoded JSON request body, or ``None`` if the body was empty.
        :returns: 200 with the stored record, 400 for any failed precondition,
            422 if the body cannot be stored.
        """
        try:
            patient_id = self._parse_id(raw_id)
            self._validate(body)
            self._check_body_id(body, patient_id)
            patient = self.store.put(patient_id, body)
        except RequestError as err:
            return err.to_response()
        except Exception:
            logger.exception("Failed to update Patient/%s from request body", raw_id)
            return error_response(422, INVALID_FORMAT_MESSAGE)

        logger.info("Updated Patient/%s", patient_id)
        return _json_response(200, patient)

    def delete(self, raw_id: str) -> FlaskResponse:
        """
        Remove the record stored under ``raw_id``.

        :param raw_id: Path segment from the request URL.
        :returns: 204 with no body, 400 for a malformed id, 404 if absent.
        """
        try:
            patient_id = self._parse_id(raw_id)
            if not self.store.delete(patient_id):
                raise self._not_found(patient_id)
        except RequestError as err:
            return err.to_response()
        except Exception:
            logger.exception("Failed to delete Patient/%s", raw_id)
            return error_response(500, "Error deleting patient")

        logger.info("Deleted Patient/%s", patient_id)
        return FlaskResponse(status_code=204)

    def list_ids(self) -> FlaskResponse:
        """
        List the ids of every stored record in ascending order.

        :returns: 200 with a JSON array, or 204 with no body when the store is
            empty. An empty array is never returned.
        """
        try:
            ids = self.store.list_ids()
        except Exception:
            logger.exception("Failed to list patient ids")
            return error_response(500, "Error retrieving patient IDs")

        if not ids:
            return FlaskResponse(status_code=204)

        return _json_response(200, ids)

    @staticmethod
    def _parse_id(raw_id: str) -> int:
        patient_id = parse_patient_id(raw_id)
        if patient_id is None:
            logger.warning("Rejected malformed patient id %r", raw_id)
            raise RequestError(status_code=400, message=INVALID_ID_MESSAGE)
        return patient_id

    @staticmethod
    def _validate(body: Any) -> None:
        result = validate_patient(body)
        if not result.valid:
            logger.warning("Rejected invalid Patient resource: %s", result.error)
            raise RequestError(status_code=400, message=str(result.error))

    @staticmethod
    def _check_body_id(body: dict[str, Any], patient_id: int) -> None:
        identifier = body.get("identifier")
        if is_absent(identifier) or identifier == []:
            return

        body_id = parse_leading_int(identifier[0].get("value"))
        if body_id is not None and body_id != patient_id:
            logger.warning(
                "Rejected update of Patient/%s carrying identifier %s",
                patient_id,
                body_id,
            )
            raise RequestError(status_code=400, message=ID_MISMATCH_MESSAGE)

    @staticmethod
    def _not_found(patient_id: int) -> RequestError:
        return RequestError(
            status_code=404, message=f"Patient with ID {patient_id} not found"
        )
