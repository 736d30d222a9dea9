"""Pytest configuration and shared fixtures for patients API tests."""

import threading
from collections.abc import Generator
from datetime import timedelta
from typing import Any

import pytest
import requests
from flask import Flask
from flask.testing import FlaskClient
from patients_api.app import create_app
from werkzeug.serving import make_server


class Client:
    """Sends raw HTTP requests to a running Patient API and returns the response."""

    def __init__(self, base_url: str, timeout: timedelta = timedelta(seconds=1)):
        self.base_url = base_url
        self.timeout = timeout.total_seconds()

    def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        data: str | None = None,
    ) -> requests.Response:
        return requests.request(
            method,
            f"{self.base_url}{path}",
            headers={"Content-Type": "application/json"},
            json=json,
            data=data,
            timeout=self.timeout,
        )

    def get_index(self) -> requests.Response:
        return requests.get(f"{self.base_url}/", timeout=self.timeout)


@pytest.fixture
def app() -> Flask:
    """Create and configure a test instance of the Flask application."""
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture
def provider_url() -> Generator[str, None, None]:
    """Serve a fresh application on a free local port and return its URL.

    Each test gets its own app, and so its own empty store. The server is shut
    down when the test finishes.
    """
    # Port 0 lets the OS pick a free port
    server = make_server("127.0.0.1", 0, create_app())
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{server.server_port}"

    server.shutdown()
    thread.join()


@pytest.fixture
def api_client(provider_url: str) -> Client:
    return Client(provider_url)
