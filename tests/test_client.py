# tests/test_client.py

from __future__ import annotations

from fastapi.testclient import TestClient

from projectboard.client import BoardClient
from projectboard.domain import mutations
from projectboard.domain.models import AppState


def _server_state(client: TestClient) -> AppState:
    return AppState.model_validate(client.get("/api/v1/state").json())


def test_create_project_is_active_locally_and_on_server(client: TestClient) -> None:
    board = BoardClient(client)
    board.refresh()

    project = board.create_project("Site vitrine")

    assert board.active_project == project
    server = _server_state(client)
    assert server.active_project_id == project.id
    assert server.projects == [project]


def test_operations_are_saved_with_put(client: TestClient) -> None:
    board = BoardClient(client)
    board.create_project("Site vitrine")

    board.add_task("Fix bug", "", "todo", "high")
    task_id = board.active_project.get_column("todo").task_ids[0]
    board.move_task(task_id, "todo", "done", 0)
    board.add_todo("Appeler le client")
    board.promote_todo(board.active_project.todos[0].id, "backlog")

    assert _server_state(client).projects == [board.active_project]
    assert [len(c.task_ids) for c in board.active_project.columns] == [1, 0, 0, 1]


def test_noop_does_not_reach_server(client: TestClient) -> None:
    board = BoardClient(client)
    project = board.create_project("Site vitrine")

    assert board.toggle_todo("missing") is project
    assert board.delete_task("missing") is project


def test_without_active_project_nothing_happens(client: TestClient) -> None:
    board = BoardClient(client)
    board.refresh()
    assert board.add_task("x", "", "todo") is None


def test_failed_save_reloads_server_state(client: TestClient) -> None:
    board = BoardClient(client)
    kept = board.create_project("Gardé")

    # projet connu localement seulement : PUT -> 404 -> refresh
    ghost = mutations.new_project("Fantôme")
    board.state = AppState(projects=[ghost, *board.state.projects], active_project_id=ghost.id)

    assert board.save(ghost) is False
    assert [p.id for p in board.state.projects] == [kept.id]
    assert board.state.active_project_id == kept.id


def test_delete_and_switch_active(client: TestClient) -> None:
    board = BoardClient(client)
    first = board.create_project("Un")
    second = board.create_project("Deux")

    board.set_active_project(first.id)
    assert _server_state(client).active_project_id == first.id

    board.delete_project(first.id)
    assert board.state.active_project_id is None
    server = _server_state(client)
    assert [p.id for p in server.projects] == [second.id]
    assert server.active_project_id is None


def test_export_then_import(client: TestClient) -> None:
    board = BoardClient(client)
    board.create_project("Site vitrine")
    board.add_column("Review")
    exported = board.export_state()

    board.delete_project(exported.projects[0].id)
    assert board.import_state(exported) == exported
