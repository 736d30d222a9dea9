"""
In-process stand-in for the Patient API, speaking ``requests``.

Calls made through :meth:`PatientsApiStub.request` are routed into a Flask test
client wrapped around a fresh :func:`patients_api.app.create_app` instance, and
the result is returned as a :class:`requests.Response`. This lets the
:class:`patients_api.client.PatientClient` be exercised without a socket.
"""

from http import HTTPStatus
from typing import Any
from urllib.parse import urlsplit

from patients_api.app import create_app
from patients_api.store import PatientStore
from requests import Response


def make_response(
    status_code: int, body: bytes = b"", content_type: str | None = None
) -> Response:
    """
    Build a :class:`requests.Response` as if it had come off the wire.

    :param status_code: HTTP status code; the reason is its standard phrase.
    :param body: Raw response body.
    :param content_type: Value for the ``Content-Type`` header, if any.
    :return: The response, decoding text as UTF-8.
    """
    response = Response()
    response.status_code = status_code
    response.reason = HTTPStatus(status_code).phrase
    if content_type is not None:
        response.headers["Content-Type"] = content_type
    response._content = body  # noqa: SLF001
    response.encoding = "utf-8"
    return response


class PatientsApiStub:
    """
    A Patient API backed by its own in-memory store.

    Every request is recorded in :attr:`requests` as ``(method, url, headers,
    json)`` so tests can check what the client sent.
    """

    def __init__(self, store: PatientStore | None = None) -> None:
        self.store = store if store is not None else PatientStore()
        self._client = create_app(self.store).test_client()
        self.requests: list[tuple[str, str, dict[str, str], Any]] = []

    def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any | None = None,
        timeout: int | None = None,  # noqa: ARG002 (unused in stub)
    ) -> Response:
        self.requests.append((method, url, dict(headers or {}), json))

        path = urlsplit(url).path
        result = self._client.open(path, method=method, json=json, headers=headers)

        response = make_response(result.status_code, result.get_data())
        response.headers.update(result.headers.items())
        return response
