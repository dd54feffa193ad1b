# tests/test_mutations.py

from __future__ import annotations

import random

import pytest

from projectboard.core.errors import InvalidInputError, NotFoundError
from projectboard.domain import mutations
from projectboard.domain.models import Project


def _tid(project: Project, title: str) -> str:
    return next(t.id for t in project.tasks.values() if t.title == title)


def _order(project: Project, column_id: str) -> list[str]:
    return [project.tasks[t].title for t in project.get_column(column_id).task_ids]


def test_new_project_has_default_columns(project: Project) -> None:
    assert [(c.id, c.title) for c in project.columns] == [
        ("backlog", "Backlog"),
        ("todo", "To Do"),
        ("in-progress", "In Progress"),
        ("done", "Done"),
    ]
    assert all(c.task_ids == [] for c in project.columns)
    assert project.tasks == {} and project.todos == []
    assert project.created_at == project.updated_at
    assert project.consistency_errors() == []


def test_add_task_goes_to_end_of_column_only(project: Project) -> None:
    p = mutations.add_task(project, "Fix bug", "", "todo", "high")

    assert len(p.tasks) == 1
    task = next(iter(p.tasks.values()))
    assert task.title == "Fix bug" and task.priority == "high" and task.column_id == "todo"
    assert p.get_column("todo").task_ids == [task.id]
    assert [len(c.task_ids) for c in p.columns] == [0, 1, 0, 0]
    assert p.consistency_errors() == []

    p2 = mutations.add_task(p, "Second", "", "todo")
    assert _order(p2, "todo") == ["Fix bug", "Second"]


def test_add_task_does_not_touch_input(project: Project) -> None:
    before = project.model_dump()
    mutations.add_task(project, "x", "", "todo")
    assert project.model_dump() == before


def test_add_task_unknown_column_raises(project: Project) -> None:
    with pytest.raises(NotFoundError):
        mutations.add_task(project, "x", "", "nope")


def test_add_task_accepts_empty_title(project: Project) -> None:
    p = mutations.add_task(project, "", "", "backlog")
    assert len(p.tasks) == 1


def test_add_task_rejects_unknown_priority(project: Project) -> None:
    with pytest.raises(InvalidInputError):
        mutations.add_task(project, "x", "", "todo", "urgent")


def test_update_task_applies_only_given_fields(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    p = mutations.update_task(busy_project, a, title="A2", description=None)

    task = p.tasks[a]
    assert task.title == "A2"
    assert task.priority == "high"
    assert task.created_at == busy_project.tasks[a].created_at
    assert p.updated_at >= busy_project.updated_at


def test_update_task_column_change_leaves_sequences_alone(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    p = mutations.update_task(busy_project, a, column_id="done")

    assert p.tasks[a].column_id == "done"
    assert a in p.get_column("todo").task_ids
    assert a not in p.get_column("done").task_ids
    assert p.consistency_errors() != []


def test_update_task_errors(busy_project: Project) -> None:
    with pytest.raises(NotFoundError):
        mutations.update_task(busy_project, "missing", title="x")
    a = _tid(busy_project, "A")
    with pytest.raises(InvalidInputError):
        mutations.update_task(busy_project, a, id="other")
    with pytest.raises(InvalidInputError):
        mutations.update_task(busy_project, a, created_at="2020-01-01T00:00:00.000Z")
    with pytest.raises(InvalidInputError):
        mutations.update_task(busy_project, a, priority="urgent")


def test_update_task_same_values_is_noop(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    assert mutations.update_task(busy_project, a, title="A") is busy_project


def test_delete_task(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    p = mutations.delete_task(busy_project, a)

    assert a not in p.tasks
    assert _order(p, "todo") == ["B"]
    assert p.consistency_errors() == []
    assert mutations.delete_task(p, a) is p


def test_move_within_column_scenario(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    p = mutations.move_task(busy_project, a, "todo", "todo", 1)
    assert _order(p, "todo") == ["B", "A"]
    assert p.consistency_errors() == []


def test_move_to_same_position_is_noop(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    assert mutations.move_task(busy_project, a, "todo", "todo", 0) is busy_project
    b = _tid(busy_project, "B")
    # index au-delà de la fin : borné, B reste dernière
    assert mutations.move_task(busy_project, b, "todo", "todo", 10) is busy_project


def test_move_across_columns(busy_project: Project) -> None:
    b = _tid(busy_project, "B")
    p = mutations.move_task(busy_project, b, "todo", "done", 0)

    assert _order(p, "todo") == ["A"]
    assert _order(p, "done") == ["B", "C"]
    assert p.tasks[b].column_id == "done"
    assert p.consistency_errors() == []


def test_move_clamps_index(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    p = mutations.move_task(busy_project, a, "todo", "done", 99)
    assert _order(p, "done") == ["C", "A"]
    p = mutations.move_task(busy_project, a, "todo", "backlog", -3)
    assert _order(p, "backlog") == ["A"]


def test_move_unresolved_ids_is_noop(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    assert mutations.move_task(busy_project, "missing", "todo", "done", 0) is busy_project
    assert mutations.move_task(busy_project, a, "nope", "done", 0) is busy_project
    assert mutations.move_task(busy_project, a, "todo", "nope", 0) is busy_project
    # A n'est pas dans backlog
    assert mutations.move_task(busy_project, a, "backlog", "done", 0) is busy_project


def test_move_round_trip(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    original_index = busy_project.get_column("todo").task_ids.index(a)

    moved = mutations.move_task(busy_project, a, "todo", "done", 1)
    back = mutations.move_task(moved, a, "done", "todo", original_index)

    assert [c.task_ids for c in back.columns] == [c.task_ids for c in busy_project.columns]
    assert {k: t.column_id for k, t in back.tasks.items()} == {
        k: t.column_id for k, t in busy_project.tasks.items()
    }


def test_add_and_rename_column(project: Project) -> None:
    p = mutations.add_column(project, "Review")
    assert [c.title for c in p.columns][-1] == "Review"
    new_id = p.columns[-1].id
    assert new_id not in {c.id for c in project.columns}

    p2 = mutations.update_column_title(p, new_id, "QA")
    assert p2.get_column(new_id).title == "QA"
    assert mutations.update_column_title(p2, "missing", "x") is p2
    assert mutations.update_column_title(p2, new_id, "QA") is p2


def test_delete_column_cascades_its_tasks_only(busy_project: Project) -> None:
    todo = busy_project.get_column("todo")
    p = mutations.delete_column(busy_project, "todo")

    assert p.get_column("todo") is None
    assert len(p.tasks) == len(busy_project.tasks) - len(todo.task_ids)
    assert set(p.tasks) == set(busy_project.tasks) - set(todo.task_ids)
    assert p.consistency_errors() == []
    assert mutations.delete_column(p, "todo") is p


def test_todos(project: Project) -> None:
    p = mutations.add_todo(project, "Acheter du lait", "low")
    p = mutations.add_todo(p, "Appeler", "high")
    assert [t.title for t in p.todos] == ["Acheter du lait", "Appeler"]
    assert not any(t.completed for t in p.todos)

    first = p.todos[0].id
    toggled = mutations.toggle_todo(p, first)
    assert toggled.todos[0].completed is True
    assert mutations.toggle_todo(toggled, first).todos[0].completed is False

    removed = mutations.delete_todo(toggled, first)
    assert [t.title for t in removed.todos] == ["Appeler"]


def test_toggle_and_delete_missing_todo_are_noops(busy_project: Project) -> None:
    assert mutations.toggle_todo(busy_project, "missing") is busy_project
    assert mutations.delete_todo(busy_project, "missing") is busy_project


def test_promote_todo(busy_project: Project) -> None:
    todo = busy_project.todos[1]
    p = mutations.promote_todo(busy_project, todo.id, "in-progress")

    assert todo.id not in {t.id for t in p.todos}
    promoted = [p.tasks[t] for t in p.get_column("in-progress").task_ids]
    assert [(t.title, t.priority) for t in promoted] == [(todo.title, todo.priority)]
    assert promoted[0].id != todo.id
    assert p.consistency_errors() == []

    assert mutations.promote_todo(p, "missing", "todo") is p
    with pytest.raises(NotFoundError):
        mutations.promote_todo(busy_project, todo.id, "nope")


def test_update_project_details(project: Project) -> None:
    p = mutations.update_project_details(project, name="Nouveau nom")
    assert p.name == "Nouveau nom" and p.description == project.description
    assert mutations.update_project_details(p, name="Nouveau nom") is p


def test_updated_at_never_goes_backwards(project: Project) -> None:
    future = project.model_copy(update={"updated_at": "2999-01-01T00:00:00.000Z"})
    p = mutations.add_todo(future, "x")
    assert p.updated_at == "2999-01-01T00:00:00.000Z"


def test_invariant_holds_under_random_operations(project: Project) -> None:
    rng = random.Random(1234)
    p = project
    for step in range(300):
        column_ids = [c.id for c in p.columns]
        task_ids = list(p.tasks)
        op = rng.choice(["add", "add", "move", "move", "delete", "add_column", "delete_column"])
        if op == "add" and column_ids:
            p = mutations.add_task(p, f"t{step}", "", rng.choice(column_ids))
        elif op == "move" and task_ids:
            task_id = rng.choice(task_ids)
            source = p.column_of(task_id).id
            p = mutations.move_task(p, task_id, source, rng.choice(column_ids), rng.randint(0, 6))
        elif op == "delete" and task_ids:
            p = mutations.delete_task(p, rng.choice(task_ids))
        elif op == "add_column" and len(column_ids) < 6:
            p = mutations.add_column(p, f"c{step}")
        elif op == "delete_column" and len(column_ids) > 2 and rng.random() < 0.3:
            p = mutations.delete_column(p, rng.choice(column_ids))
        assert p.consistency_errors() == [], (step, op)


def test_update_task_to_unknown_column_raises(busy_project: Project) -> None:
    a = _tid(busy_project, "A")
    with pytest.raises(NotFoundError):
        mutations.update_task(busy_project, a, column_id="nope")
    assert busy_project.tasks[a].column_id == "todo"
    assert busy_project.consistency_errors() == []


def test_timestamps_are_normalised_on_validation(project: Project) -> None:
    data = project.model_dump(by_alias=True)
    data.update(createdAt="2025-01-01T10:00:00Z", updatedAt="2999-01-01T02:00:00+02:00")
    p = Project.model_validate(data)

    assert p.created_at == "2025-01-01T10:00:00.000Z"
    assert p.updated_at == "2999-01-01T00:00:00.000Z"
    # l'horodatage futur reste le plus récent, quel que soit son format d'origine
    assert mutations.add_todo(p, "x").updated_at == "2999-01-01T00:00:00.000Z"


def test_invalid_timestamp_is_rejected(project: Project) -> None:
    data = project.model_dump(by_alias=True)
    data["createdAt"] = "hier"
    with pytest.raises(ValueError):
        Project.model_validate(data)
