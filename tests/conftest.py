"""
Pytest fixtures for the error translation service tests.
"""

import pytest
from fastapi.testclient import TestClient
from src.main import create_app


class CapturingSink:
    """Event sink that keeps every recorded event in memory."""

    def __init__(self):
        self.records = []

    def record(self, event, **fields):
        self.records.append((event, fields))


@pytest.fixture
def sink():
    return CapturingSink()


@pytest.fixture
def app(sink):
    return create_app(sink=sink)


@pytest.fixture
def client(app):
    return TestClient(app)
