import asyncio
import json
import os

import pytest
from fastapi.testclient import TestClient

from todo_api import main
from todo_api.errors import StorageError
from todo_api.generate_openapi import generate_openapi
from todo_api.repositories import InMemoryRepository
from todo_api.settings import get_settings

from .conftest import make_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in [
            "PERSISTENCE_BACKEND",
            "MONGO_URL",
            "MONGO_DATABASE",
            "MONGO_COLLECTION",
            "MONGO_TIMEOUT_MS",
            "PORT",
            "CORS_ALLOW_ORIGINS",
            "LOG_LEVEL",
        ]:
            monkeypatch.delenv(name, raising=False)
        s = get_settings()
        assert s.persistence_backend == "mongo"
        assert s.mongo_url == "mongodb://localhost:27017"
        assert s.mongo_database == "golang"
        assert s.mongo_collection == "todolist"
        assert s.port == 5000
        assert s.cors_allow_origins == ["*"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "MEMORY")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.port == 8080
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
        monkeypatch.setenv("PORT", "not-a-port")
        s = get_settings()
        assert s.persistence_backend == "mongo"
        assert s.port == 5000

    def test_dotenv_file_is_loaded(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("MONGO_COLLECTION=from_dotenv\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MONGO_COLLECTION", raising=False)
        try:
            assert get_settings().mongo_collection == "from_dotenv"
        finally:
            os.environ.pop("MONGO_COLLECTION", None)


class TestLifespan:
    def test_memory_backend_built_from_settings(self):
        app = main.create_app(settings=make_settings(persistence_backend="memory"))
        with TestClient(app) as client:
            assert client.get("/").json()["backend"] == "memory"
            assert client.get("/api/todos").json() == []

    def test_startup_connection_failure_is_fatal(self, monkeypatch):
        def unreachable(settings):
            raise StorageError("no servers available")

        monkeypatch.setattr(main, "get_repository", unreachable)
        app = main.create_app(settings=make_settings(persistence_backend="mongo"))

        async def start():
            async with app.router.lifespan_context(app):
                pass

        with pytest.raises(StorageError):
            asyncio.run(start())

    def test_owned_repository_closed_on_shutdown(self, monkeypatch):
        closed = []

        class ClosingRepository(InMemoryRepository):
            def close(self):
                closed.append(True)

        monkeypatch.setattr(main, "get_repository", lambda settings: ClosingRepository())
        app = main.create_app(settings=make_settings())
        with TestClient(app):
            assert closed == []
        assert closed == [True]

    def test_storage_error_renders_500(self):
        class BrokenRepository(InMemoryRepository):
            def find_all(self):
                raise StorageError("connection reset by peer")

        app = main.create_app(settings=make_settings(), repository=BrokenRepository())
        with TestClient(app) as client:
            res = client.get("/api/todos")
        assert res.status_code == 500
        assert res.json() == {"error": "StorageError", "message": "connection reset by peer"}


class TestOpenAPI:
    def test_generate_openapi_writes_schema(self, tmp_path):
        out = tmp_path / "interfaces" / "openapi.json"
        written = generate_openapi(str(out))
        assert written == str(out)
        schema = json.loads(out.read_text(encoding="utf-8"))
        assert {t["name"] for t in schema["tags"]} >= {"health", "todos"}
        methods = set(schema["paths"]["/api/todos"])
        assert methods == {"get", "post", "patch", "delete"}
        assert set(schema["paths"]["/api/todos/{todo_id}"]) == {"patch", "delete"}


class TestRouteDocs:
    def test_every_todo_route_documented(self):
        from todo_api.routers.todos import router

        for route in router.routes:
            assert route.endpoint.__doc__, route.name
