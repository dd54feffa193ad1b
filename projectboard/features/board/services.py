"""
➡️ But : Orchestrer une opération de board côté serveur.

BoardService : charge le projet, applique UNE fonction du moteur de mutations,
puis persiste le projet entier (remplacement complet) seulement s'il a changé.

🔹 Avantages :

Les routes n'ont ni SQL ni règle métier.

Un no-op (id déjà supprimé, drag redondant...) ne déclenche aucune écriture.
"""

import logging
from typing import Any, Callable, Optional

from projectboard.core.errors import NotFoundError
from projectboard.db.store import ProjectStore
from projectboard.domain import mutations
from projectboard.domain.models import Project

logger = logging.getLogger(__name__)


class BoardService:
    def __init__(self, store: ProjectStore):
        self.store = store

    # --------------- Helpers ---------------

    def get_project(self, project_id: str) -> Project:
        project = self.store.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found.")
        return project

    def _apply(self, project_id: str, mutate: Callable[..., Project], *args: Any, **kwargs: Any) -> Project:
        project = self.get_project(project_id)
        updated = mutate(project, *args, **kwargs)
        if updated is project:
            logger.debug("%s sans effet sur le projet %s", mutate.__name__, project_id)
            return project
        self.store.update_project(updated)
        return updated

    # --------------- Projet ---------------

    def create_project(self, name: str, description: str = "") -> Project:
        """Nouveau projet avec les 4 colonnes par défaut, qui devient le projet actif."""
        project = mutations.new_project(name, description)
        self.store.create_project(project)
        self.store.set_active_project(project.id)
        return project

    def update_details(
        self, project_id: str, *, name: Optional[str] = None, description: Optional[str] = None
    ) -> Project:
        return self._apply(project_id, mutations.update_project_details, name=name, description=description)

    # --------------- Tâches ---------------

    def add_task(self, project_id: str, *, title: str, description: str, column_id: str, priority: str) -> Project:
        return self._apply(project_id, mutations.add_task, title, description, column_id, priority)

    def update_task(self, project_id: str, task_id: str, **changes: Any) -> Project:
        return self._apply(project_id, mutations.update_task, task_id, **changes)

    def delete_task(self, project_id: str, task_id: str) -> Project:
        return self._apply(project_id, mutations.delete_task, task_id)

    def move_task(
        self, project_id: str, task_id: str, *, from_column_id: str, to_column_id: str, new_index: int
    ) -> Project:
        return self._apply(project_id, mutations.move_task, task_id, from_column_id, to_column_id, new_index)

    # --------------- Colonnes ---------------

    def add_column(self, project_id: str, title: str) -> Project:
        return self._apply(project_id, mutations.add_column, title)

    def delete_column(self, project_id: str, column_id: str) -> Project:
        return self._apply(project_id, mutations.delete_column, column_id)

    def rename_column(self, project_id: str, column_id: str, title: str) -> Project:
        return self._apply(project_id, mutations.update_column_title, column_id, title)

    # --------------- Todos ---------------

    def add_todo(self, project_id: str, *, title: str, priority: str) -> Project:
        return self._apply(project_id, mutations.add_todo, title, priority)

    def toggle_todo(self, project_id: str, todo_id: str) -> Project:
        return self._apply(project_id, mutations.toggle_todo, todo_id)

    def delete_todo(self, project_id: str, todo_id: str) -> Project:
        return self._apply(project_id, mutations.delete_todo, todo_id)

    def promote_todo(self, project_id: str, todo_id: str, *, column_id: str) -> Project:
        return self._apply(project_id, mutations.promote_todo, todo_id, column_id)
