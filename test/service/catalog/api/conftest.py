"""
API test configuration

Every test gets a fresh TestClient whose container serves the in-memory
repositories from the parent conftest.
"""

from collections.abc import Generator

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from test_main import app


@pytest.fixture
def client(product_repo, product_image_repo) -> Generator[TestClient, None, None]:
    container.reset_singletons()
    container.product_repo.override(providers.Object(product_repo))
    container.product_image_repo.override(providers.Object(product_image_repo))

    with TestClient(app) as test_client:
        yield test_client

    container.product_repo.reset_override()
    container.product_image_repo.reset_override()
    container.reset_singletons()
