import dataclasses

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryRepository
from todo_api.settings import Settings, get_settings


def make_settings(**overrides) -> Settings:
    return dataclasses.replace(get_settings(), **overrides)


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def client(repo):
    app = create_app(settings=make_settings(persistence_backend="memory"), repository=repo)
    with TestClient(app) as c:
        yield c
