"""
➡️ But : Traduire l'agrégat Project <-> lignes normalisées, dans les deux sens.

En mémoire, l'ordre est porté par la position dans les listes (columns, task_ids, todos).
En base, il est porté par une colonne entière `position` par ligne.

to_rows(project)   : Project -> ProjectRows (aucun accès DB)
from_rows(...)     : lignes -> Project (aucun accès DB)

Les deux fonctions sont pures : le ProjectStore s'occupe des sessions et transactions.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from projectboard.db.models.columns import ColumnRow
from projectboard.db.models.projects import ProjectRow
from projectboard.db.models.tasks import TaskRow
from projectboard.db.models.todos import TodoRow
from projectboard.domain.models import Column, Project, Task, Todo


@dataclass
class ProjectRows:
    project: ProjectRow
    columns: List[ColumnRow] = field(default_factory=list)
    tasks: List[TaskRow] = field(default_factory=list)
    todos: List[TodoRow] = field(default_factory=list)


def project_row(project: Project) -> ProjectRow:
    return ProjectRow(
        id=project.id,
        name=project.name,
        description=project.description,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def column_rows(project: Project) -> List[ColumnRow]:
    return [
        ColumnRow(project_id=project.id, id=col.id, title=col.title, position=index)
        for index, col in enumerate(project.columns)
    ]


def to_rows(project: Project) -> ProjectRows:
    """
    Les tâches sont écrites en parcourant les séquences des colonnes :
    - position = rang dans la séquence
    - column_id = task.column_id (tel quel, voir update_task)
    Une tâche absente de toutes les séquences n'est pas écrite.
    """
    tasks: List[TaskRow] = []
    for col in project.columns:
        for index, task_id in enumerate(col.task_ids):
            task = project.tasks.get(task_id)
            if task is None:
                continue
            tasks.append(
                TaskRow(
                    project_id=project.id,
                    id=task.id,
                    column_id=task.column_id,
                    title=task.title,
                    description=task.description,
                    priority=task.priority,
                    position=index,
                    created_at=task.created_at,
                )
            )

    todos = [
        TodoRow(
            project_id=project.id,
            id=todo.id,
            title=todo.title,
            completed=todo.completed,
            priority=todo.priority,
            position=index,
            created_at=todo.created_at,
        )
        for index, todo in enumerate(project.todos)
    ]

    return ProjectRows(
        project=project_row(project),
        columns=column_rows(project),
        tasks=tasks,
        todos=todos,
    )


def from_rows(
    project: ProjectRow,
    columns: Iterable[ColumnRow],
    tasks: Iterable[TaskRow],
    todos: Iterable[TodoRow],
) -> Project:
    """Reconstruit le Project ; chaque liste est triée par position ici (l'ordre d'entrée est libre)."""
    task_rows = sorted(tasks, key=lambda r: r.position)

    ids_by_column: Dict[str, List[str]] = {}
    for row in task_rows:
        ids_by_column.setdefault(row.column_id, []).append(row.id)

    return Project(
        id=project.id,
        name=project.name,
        description=project.description or "",
        columns=[
            Column(id=row.id, title=row.title, task_ids=ids_by_column.get(row.id, []))
            for row in sorted(columns, key=lambda r: r.position)
        ],
        tasks={
            row.id: Task(
                id=row.id,
                title=row.title,
                description=row.description or "",
                priority=row.priority,
                column_id=row.column_id,
                created_at=row.created_at,
            )
            for row in task_rows
        },
        todos=[
            Todo(
                id=row.id,
                title=row.title,
                completed=bool(row.completed),
                priority=row.priority,
                created_at=row.created_at,
            )
            for row in sorted(todos, key=lambda r: r.position)
        ],
        created_at=project.created_at,
        updated_at=project.updated_at,
    )
