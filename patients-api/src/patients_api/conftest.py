"""Pytest configuration and shared fixtures for patients API unit tests."""

from collections.abc import Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from patients_api.app import create_app
from patients_api.controller import PatientController
from patients_api.store import PatientStore


@pytest.fixture
def store() -> PatientStore:
    return PatientStore()


@pytest.fixture
def controller(store: PatientStore) -> PatientController:
    return PatientController(store)


@pytest.fixture
def app(store: PatientStore) -> Flask:
    app = create_app(store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app: Flask) -> Generator[FlaskClient, None, None]:
    with app.test_client() as client:
        yield client


@pytest.fixture
def valid_patient_payload() -> dict[str, Any]:
    return {
        "resourceType": "Patient",
        "name": [{"given": ["Ana"], "family": "Souza"}],
        "gender": "female",
    }


@pytest.fixture
def full_patient_payload() -> dict[str, Any]:
    return {
        "resourceType": "Patient",
        "active": True,
        "name": [{"given": ["Maria", "Clara"], "family": "Lima"}],
        "telecom": [
            {"system": "phone", "value": "(51) 3333-4444"},
            {"system": "email", "value": "maria.lima@example.com"},
        ],
        "gender": "female",
        "birthDate": "1985-07-23",
        "address": [
            {
                "line": ["Av. Ipiranga, 6681"],
                "city": "Porto Alegre",
                "state": "RS",
                "postalCode": "90619-900",
            }
        ],
    }
