"""
➡️ But : Moteur de mutations du board, en fonctions pures.

Chaque opération prend un Project et retourne le Project à persister, sans jamais
modifier son entrée. Quand l'opération ne change rien (id absent, même position...),
le Project d'origine est retourné tel quel (même objet, updated_at inchangé) :
les appelants testent `result is project` pour savoir s'il faut écrire.

Règles :
- add_task / update_task lèvent NotFoundError (colonne ou tâche inconnue).
- les autres opérations tolèrent les ids absents (no-op), pour absorber
  les doubles clics et requêtes rejouées côté client.
- update_task ne touche pas aux séquences des colonnes, même si column_id change :
  seul move_task déplace une tâche sur le board.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from projectboard.core.errors import InvalidInputError, NotFoundError
from projectboard.domain.models import PRIORITIES, Column, Project, Task, Todo, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = (
    ("backlog", "Backlog"),
    ("todo", "To Do"),
    ("in-progress", "In Progress"),
    ("done", "Done"),
)

_TASK_MUTABLE_FIELDS = ("title", "description", "priority", "column_id")
_TASK_IMMUTABLE_FIELDS = ("id", "created_at")


def new_id() -> str:
    return str(uuid.uuid4())


def _check_priority(priority: str) -> None:
    if priority not in PRIORITIES:
        raise InvalidInputError(f"Unknown priority {priority!r}")


def _touch(project: Project, **changes: Any) -> Project:
    """
    Nouvelle valeur du projet avec updated_at rafraîchi (jamais en arrière).
    Les horodatages validés sont sous forme canonique : max() sur les chaînes suit la chronologie.
    """
    changes["updated_at"] = max(utc_now_iso(), project.updated_at)
    return project.model_copy(update=changes)


def _replace_column(project: Project, column_id: str, **changes: Any) -> List[Column]:
    return [c.model_copy(update=changes) if c.id == column_id else c for c in project.columns]


# -----------------------------
# Projet
# -----------------------------

def new_project(name: str, description: str = "") -> Project:
    now = utc_now_iso()
    return Project(
        id=new_id(),
        name=name,
        description=description,
        columns=[Column(id=cid, title=title) for cid, title in DEFAULT_COLUMNS],
        created_at=now,
        updated_at=now,
    )


def update_project_details(
    project: Project, *, name: Optional[str] = None, description: Optional[str] = None
) -> Project:
    changes: Dict[str, Any] = {}
    if name is not None and name != project.name:
        changes["name"] = name
    if description is not None and description != project.description:
        changes["description"] = description
    if not changes:
        return project
    return _touch(project, **changes)


# -----------------------------
# Tâches
# -----------------------------

def add_task(
    project: Project,
    title: str,
    description: str,
    column_id: str,
    priority: str = "medium",
) -> Project:
    if project.get_column(column_id) is None:
        raise NotFoundError(f"Column {column_id} not found")
    _check_priority(priority)

    task = Task(
        id=new_id(),
        title=title,
        description=description,
        priority=priority,
        column_id=column_id,
        created_at=utc_now_iso(),
    )
    column = project.get_column(column_id)
    return _touch(
        project,
        tasks={**project.tasks, task.id: task},
        columns=_replace_column(project, column_id, task_ids=[*column.task_ids, task.id]),
    )


def update_task(project: Project, task_id: str, **changes: Any) -> Project:
    """
    Applique uniquement les champs fournis (title / description / priority / column_id).
    Un changement de column_id ne met PAS à jour les séquences des colonnes ;
    la colonne visée doit exister (NotFoundError sinon).
    """
    task = project.tasks.get(task_id)
    if task is None:
        raise NotFoundError(f"Task {task_id} not found")

    forbidden = [k for k in changes if k in _TASK_IMMUTABLE_FIELDS]
    if forbidden:
        raise InvalidInputError(f"Immutable task fields: {', '.join(forbidden)}")
    unknown = [k for k in changes if k not in _TASK_MUTABLE_FIELDS]
    if unknown:
        raise InvalidInputError(f"Unknown task fields: {', '.join(unknown)}")

    applied = {k: v for k, v in changes.items() if v is not None and getattr(task, k) != v}
    if not applied:
        return project
    if "priority" in applied:
        _check_priority(applied["priority"])
    if "column_id" in applied and project.get_column(applied["column_id"]) is None:
        raise NotFoundError(f"Column {applied['column_id']} not found")

    return _touch(project, tasks={**project.tasks, task_id: task.model_copy(update=applied)})


def delete_task(project: Project, task_id: str) -> Project:
    if task_id not in project.tasks:
        return project

    tasks = {k: v for k, v in project.tasks.items() if k != task_id}
    columns = [
        c.model_copy(update={"task_ids": [t for t in c.task_ids if t != task_id]})
        if task_id in c.task_ids
        else c
        for c in project.columns
    ]
    return _touch(project, tasks=tasks, columns=columns)


def move_task(
    project: Project,
    task_id: str,
    from_column_id: str,
    to_column_id: str,
    new_index: int,
) -> Project:
    """
    Retire la tâche de la colonne source puis l'insère à new_index dans la colonne cible
    (index pris après retrait, borné à [0, len(cible)]).
    No-op si un id ne se résout pas ou si l'ordre obtenu est identique à l'ordre actuel
    (événements de drag redondants).
    """
    task = project.tasks.get(task_id)
    source = project.get_column(from_column_id)
    target = project.get_column(to_column_id)
    if task is None or source is None or target is None:
        logger.warning(
            "move_task ignoré: tâche ou colonne introuvable (task=%s, from=%s, to=%s)",
            task_id, from_column_id, to_column_id,
        )
        return project
    if task_id not in source.task_ids:
        logger.warning("move_task ignoré: la tâche %s n'est pas dans la colonne %s", task_id, from_column_id)
        return project

    source_ids = [t for t in source.task_ids if t != task_id]
    target_ids = source_ids if source is target else [t for t in target.task_ids if t != task_id]
    index = min(max(new_index, 0), len(target_ids))
    target_ids = [*target_ids[:index], task_id, *target_ids[index:]]

    if source is target:
        if target_ids == source.task_ids:
            return project
        columns = _replace_column(project, source.id, task_ids=target_ids)
    else:
        columns = [
            c.model_copy(update={"task_ids": source_ids}) if c.id == source.id
            else c.model_copy(update={"task_ids": target_ids}) if c.id == target.id
            else c
            for c in project.columns
        ]

    tasks = project.tasks
    if task.column_id != target.id:
        tasks = {**tasks, task_id: task.model_copy(update={"column_id": target.id})}
    return _touch(project, columns=columns, tasks=tasks)


# -----------------------------
# Colonnes
# -----------------------------

def add_column(project: Project, title: str) -> Project:
    column = Column(id=new_id(), title=title)
    return _touch(project, columns=[*project.columns, column])


def delete_column(project: Project, column_id: str) -> Project:
    """Supprime la colonne ET les tâches de sa séquence (pas de réaffectation)."""
    column = project.get_column(column_id)
    if column is None:
        return project

    removed = set(column.task_ids)
    return _touch(
        project,
        columns=[c for c in project.columns if c.id != column_id],
        tasks={k: v for k, v in project.tasks.items() if k not in removed},
    )


def update_column_title(project: Project, column_id: str, title: str) -> Project:
    column = project.get_column(column_id)
    if column is None or column.title == title:
        return project
    return _touch(project, columns=_replace_column(project, column_id, title=title))


# -----------------------------
# Todos
# -----------------------------

def add_todo(project: Project, title: str, priority: str = "medium") -> Project:
    _check_priority(priority)
    todo = Todo(id=new_id(), title=title, completed=False, priority=priority, created_at=utc_now_iso())
    return _touch(project, todos=[*project.todos, todo])


def toggle_todo(project: Project, todo_id: str) -> Project:
    if project.get_todo(todo_id) is None:
        return project
    todos = [
        t.model_copy(update={"completed": not t.completed}) if t.id == todo_id else t
        for t in project.todos
    ]
    return _touch(project, todos=todos)


def delete_todo(project: Project, todo_id: str) -> Project:
    if project.get_todo(todo_id) is None:
        return project
    return _touch(project, todos=[t for t in project.todos if t.id != todo_id])


def promote_todo(project: Project, todo_id: str, column_id: str) -> Project:
    """Transforme un todo en tâche : création dans column_id puis suppression du todo."""
    todo = project.get_todo(todo_id)
    if todo is None:
        return project
    with_task = add_task(project, todo.title, "", column_id, todo.priority)
    return delete_todo(with_task, todo_id)
