# tests/test_store.py

from __future__ import annotations

import pytest
from sqlmodel import Session, select

from projectboard.core.errors import InvalidInputError, NotFoundError, StorageError
from projectboard.db.models.columns import ColumnRow
from projectboard.db.models.tasks import TaskRow
from projectboard.db.models.todos import TodoRow
from projectboard.db.session import init_db
from projectboard.db.store import ProjectStore
from projectboard.domain import mutations
from projectboard.domain.models import AppState, Project


def _dump(state: AppState) -> dict:
    return state.model_dump(mode="json", by_alias=True)


def test_empty_store(store: ProjectStore) -> None:
    state = store.get_app_state()
    assert state.projects == []
    assert state.active_project_id is None


def test_init_schema_is_idempotent(store: ProjectStore, project: Project) -> None:
    store.create_project(project)
    store.set_active_project(project.id)
    store.init_schema()
    init_db(store.engine)

    state = store.get_app_state()
    assert [p.id for p in state.projects] == [project.id]
    assert state.active_project_id == project.id


def test_create_writes_project_and_columns(store: ProjectStore, project: Project) -> None:
    store.create_project(project)
    assert store.get_project(project.id) == project


def test_default_column_ids_can_repeat_across_projects(store: ProjectStore) -> None:
    first = mutations.new_project("Un")
    second = mutations.new_project("Deux")
    store.create_project(first)
    store.create_project(second)

    assert store.get_project(first.id).columns == store.get_project(second.id).columns


def test_create_duplicate_id_is_storage_error(store: ProjectStore, project: Project) -> None:
    store.create_project(project)
    with pytest.raises(StorageError):
        store.create_project(project)


def test_update_replaces_everything(store: ProjectStore, project: Project, busy_project: Project) -> None:
    store.create_project(project)
    store.update_project(busy_project)
    assert store.get_project(project.id) == busy_project

    a = next(t for t in busy_project.tasks.values() if t.title == "A").id
    smaller = mutations.delete_column(mutations.move_task(busy_project, a, "todo", "done", 0), "todo")
    smaller = mutations.update_project_details(smaller, name="Renommé", description="")
    store.update_project(smaller)

    reread = store.get_project(project.id)
    assert reread == smaller
    assert reread.get_column("todo") is None
    assert [reread.tasks[t].title for t in reread.get_column("done").task_ids] == ["A", "C"]


def test_update_unknown_project_is_not_found(store: ProjectStore, project: Project) -> None:
    with pytest.raises(NotFoundError):
        store.update_project(project)


def test_failed_update_leaves_previous_rows(store: ProjectStore, project: Project, busy_project: Project) -> None:
    store.create_project(project)
    store.update_project(busy_project)

    # même id de tâche dans deux colonnes -> violation de clé primaire au milieu de l'écriture
    a = busy_project.get_column("todo").task_ids[0]
    broken = busy_project.model_copy(
        update={"columns": [c.model_copy(update={"task_ids": [*c.task_ids, a]}) if c.id == "done" else c
                            for c in busy_project.columns],
                "name": "cassé"}
    )
    with pytest.raises(StorageError):
        store.update_project(broken)

    assert store.get_project(project.id) == busy_project


def test_projects_newest_first(store: ProjectStore) -> None:
    old = mutations.new_project("Ancien").model_copy(
        update={"created_at": "2024-01-01T00:00:00.000Z", "updated_at": "2024-01-01T00:00:00.000Z"}
    )
    new = mutations.new_project("Récent").model_copy(
        update={"created_at": "2025-01-01T00:00:00.000Z", "updated_at": "2025-01-01T00:00:00.000Z"}
    )
    store.create_project(old)
    store.create_project(new)

    assert [p.name for p in store.get_app_state().projects] == ["Récent", "Ancien"]


def test_delete_cascades_and_clears_active(store: ProjectStore, project: Project, busy_project: Project) -> None:
    store.create_project(project)
    store.update_project(busy_project)
    store.set_active_project(project.id)

    store.delete_project(project.id)

    state = store.get_app_state()
    assert state.projects == []
    assert state.active_project_id is None
    with Session(store.engine) as session:
        for model in (ColumnRow, TaskRow, TodoRow):
            assert session.exec(select(model)).all() == []

    # no-op sur un id absent
    store.delete_project(project.id)


def test_delete_other_project_keeps_active(store: ProjectStore) -> None:
    keep, drop = mutations.new_project("Garder"), mutations.new_project("Jeter")
    store.create_project(keep)
    store.create_project(drop)
    store.set_active_project(keep.id)

    store.delete_project(drop.id)
    assert store.get_app_state().active_project_id == keep.id


def test_export_import_round_trip(store: ProjectStore, busy_project: Project) -> None:
    other = mutations.add_column(mutations.new_project("Autre"), "Review").model_copy(
        update={"created_at": "2000-01-01T00:00:00.000Z"}
    )
    store.create_project(busy_project)
    store.update_project(busy_project)
    store.create_project(other)
    store.set_active_project(other.id)

    exported = store.export_state()
    store.import_from_json(_dump(exported))

    assert store.export_state() == exported


def test_import_replaces_all_and_trusts_columns(store: ProjectStore, project: Project) -> None:
    store.create_project(project)
    custom = mutations.new_project("Importé").model_copy(update={"columns": []})
    custom = mutations.add_column(custom, "Seule colonne")
    custom = mutations.add_task(custom, "T", "", custom.columns[0].id)

    store.import_from_json(_dump(AppState(projects=[custom], active_project_id=custom.id)))

    state = store.get_app_state()
    assert [p.id for p in state.projects] == [custom.id]
    assert state.projects[0] == custom
    assert state.active_project_id == custom.id


@pytest.mark.parametrize(
    "payload",
    [
        {"projects": "not-an-array"},
        {"activeProjectId": None},
        ["not", "an", "object"],
        {"projects": [{"id": "x"}]},
    ],
)
def test_import_rejects_bad_shape_before_writing(store: ProjectStore, busy_project: Project, payload) -> None:
    store.create_project(busy_project)
    store.update_project(busy_project)
    store.set_active_project(busy_project.id)
    before = store.get_app_state()

    with pytest.raises(InvalidInputError):
        store.import_from_json(payload)

    assert store.get_app_state() == before


def test_import_failure_rolls_back(store: ProjectStore, busy_project: Project) -> None:
    store.create_project(busy_project)
    store.update_project(busy_project)
    before = store.get_app_state()

    dup = mutations.new_project("Doublon")
    with pytest.raises(StorageError):
        store.import_from_json(_dump(AppState(projects=[dup, dup])))

    assert store.get_app_state() == before


def test_newest_first_across_timestamp_formats(store: ProjectStore) -> None:
    # 12:00+02:00 == 10:00Z, donc plus ancien que 11:00Z
    older = mutations.new_project("Offset").model_dump(mode="json", by_alias=True)
    older.update(createdAt="2025-01-01T12:00:00+02:00", updatedAt="2025-01-01T12:00:00+02:00")
    newer = mutations.new_project("Zulu").model_dump(mode="json", by_alias=True)
    newer.update(createdAt="2025-01-01T11:00:00Z", updatedAt="2025-01-01T11:00:00Z")

    store.import_from_json({"projects": [older, newer], "activeProjectId": None})

    projects = store.get_app_state().projects
    assert [p.name for p in projects] == ["Zulu", "Offset"]
    assert projects[1].created_at == "2025-01-01T10:00:00.000Z"
