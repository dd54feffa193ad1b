# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from projectboard.core.config import Settings
from projectboard.db.session import build_engine
from projectboard.db.store import ProjectStore
from projectboard.domain import mutations
from projectboard.domain.models import Project
from projectboard.main import create_app


@pytest.fixture()
def test_settings() -> Settings:
    """Base SQLite en mémoire, une par test."""
    return Settings(ENV="test", DATABASE_URL="sqlite://", DB_ECHO=False)


@pytest.fixture()
def store(test_settings: Settings) -> ProjectStore:
    engine = build_engine(test_settings.DATABASE_URL)
    store = ProjectStore(engine)
    store.init_schema()
    yield store
    engine.dispose()


@pytest.fixture()
def client(test_settings: Settings) -> TestClient:
    app = create_app(test_settings)
    with TestClient(app) as c:  # `with` => lifespan => init_schema()
        yield c


@pytest.fixture()
def project() -> Project:
    """Projet neuf avec les colonnes backlog / todo / in-progress / done."""
    return mutations.new_project("Site vitrine", "Refonte")


@pytest.fixture()
def busy_project(project: Project) -> Project:
    """Board rempli : 2 tâches dans todo, 1 dans done, 2 todos."""
    p = mutations.add_task(project, "A", "", "todo", "high")
    p = mutations.add_task(p, "B", "", "todo", "low")
    p = mutations.add_task(p, "C", "desc", "done", "medium")
    p = mutations.add_todo(p, "Acheter du lait", "low")
    p = mutations.add_todo(p, "Appeler le client", "high")
    return p
