"""
Shared fixtures for artifactory_client tests.
"""
from pathlib import Path

import pytest

from artifactory_client import AuthConfig, ClientConfig

BASE_URL = "https://artifactory.example.com/artifactory/"
FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def basic_auth():
    return AuthConfig(type="basic", username="admin", password="password")


@pytest.fixture
def config(basic_auth):
    return ClientConfig(base_url=BASE_URL, auth=basic_auth)


@pytest.fixture
def prova_file():
    """Fixture file whose content is exactly b'hello'."""
    return FIXTURES / "prova.txt"
