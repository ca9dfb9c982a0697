"""Shared fixtures: an in-memory store, the services built on it and an API client."""

import pytest
from fastapi.testclient import TestClient

from hotel_booking_api.app.core.db import DocumentStore
from hotel_booking_api.app.main import create_app
from hotel_booking_api.app.services import build_services

from .fakes import FakeDatabase


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore(FakeDatabase())


@pytest.fixture
def services(store):
    return build_services(store)


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as test_client:
        yield test_client
