"""Fixtures shared by the acceptance scenarios."""

from dataclasses import dataclass

import pytest
import requests


@dataclass
class ResponseContext:
    """Holds the last response so later steps can make assertions on it."""

    response: requests.Response | None = None


@pytest.fixture
def response_context() -> ResponseContext:
    return ResponseContext()
