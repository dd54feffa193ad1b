"""
➡️ But : Définir l'agrégat Projet tel que le manipulent le moteur de mutations, les routes et le client.

Project possède ses Column, Task et Todo (jamais partagés entre deux projets).
Les colonnes portent l'ordre du board (task_ids) ; chaque Task pointe vers sa colonne (column_id).

Modèles pydantic figés (frozen) : une mutation produit toujours une nouvelle valeur,
l'ancienne n'est jamais modifiée.

Le format JSON est en camelCase (taskIds, columnId, createdAt, activeProjectId...),
les attributs Python en snake_case.
"""

from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["low", "medium", "high"]
PRIORITIES = ("low", "medium", "high")


def format_iso(moment: datetime) -> str:
    """Forme canonique : ISO-8601 UTC en millisecondes, suffixe Z (ex: 2025-01-01T10:00:00.000Z)."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return format_iso(datetime.now(timezone.utc))


def normalize_iso(value: str) -> str:
    """
    Ramène tout horodatage ISO-8601 (offset, sans millisecondes, Z...) à la forme canonique.
    Sans fuseau, l'heure est lue comme UTC.
    Sous forme canonique, l'ordre des chaînes est l'ordre chronologique.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_iso(moment)


Timestamp = Annotated[str, AfterValidator(normalize_iso)]


class BoardModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Todo(BoardModel):
    id: str
    title: str
    completed: bool = False
    priority: Priority = "medium"
    created_at: Timestamp


class Task(BoardModel):
    id: str
    title: str
    description: str = ""
    priority: Priority = "medium"
    column_id: str
    created_at: Timestamp


class Column(BoardModel):
    id: str
    title: str
    task_ids: List[str] = Field(default_factory=list)


class Project(BoardModel):
    id: str
    name: str
    description: str = ""
    columns: List[Column] = Field(default_factory=list)
    tasks: Dict[str, Task] = Field(default_factory=dict)
    todos: List[Todo] = Field(default_factory=list)
    created_at: Timestamp
    updated_at: Timestamp

    def get_column(self, column_id: str) -> Optional[Column]:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def get_todo(self, todo_id: str) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def column_of(self, task_id: str) -> Optional[Column]:
        """Colonne dont la séquence contient task_id (peut différer de task.column_id après update_task)."""
        for column in self.columns:
            if task_id in column.task_ids:
                return column
        return None

    def consistency_errors(self) -> List[str]:
        """
        Vérifie l'invariant colonne <-> tâche dans les deux sens.
        Retourne la liste des violations (vide si le board est cohérent).
        """
        errors: List[str] = []
        column_ids = [c.id for c in self.columns]
        if len(set(column_ids)) != len(column_ids):
            errors.append("duplicate column ids")

        seen: Dict[str, str] = {}
        for column in self.columns:
            for task_id in column.task_ids:
                if task_id in seen:
                    errors.append(f"task {task_id} listed in {seen[task_id]} and {column.id}")
                    continue
                seen[task_id] = column.id
                task = self.tasks.get(task_id)
                if task is None:
                    errors.append(f"column {column.id} references missing task {task_id}")
                elif task.column_id != column.id:
                    errors.append(f"task {task_id} is in column {column.id} but points to {task.column_id}")

        for task_id, task in self.tasks.items():
            if task_id != task.id:
                errors.append(f"task key {task_id} does not match task id {task.id}")
            if task.column_id not in column_ids:
                errors.append(f"task {task_id} points to unknown column {task.column_id}")
            elif task_id not in seen:
                errors.append(f"task {task_id} is not listed in column {task.column_id}")
        return errors


class AppState(BoardModel):
    projects: List[Project] = Field(default_factory=list)
    active_project_id: Optional[str] = None

    def get_project(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None
