# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.repos.product_repo import InMemoryProductStore


@pytest.fixture
def store():
    return InMemoryProductStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))
