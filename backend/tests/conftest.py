from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from livedemo.demos import registry
from livedemo.engines.transpiler import clear_cache
from livedemo.main import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_registry() -> Generator[None, None, None]:
    """Every test starts with pristine built-in demos and an empty transpile cache."""
    registry.reset()
    clear_cache()
    yield
    registry.reset()
