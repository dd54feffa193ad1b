"""
➡️ But : Copie de travail côté client, synchronisée avec l'API.

BoardClient garde un AppState local, applique les opérations du moteur de mutations
sur le projet actif (réponse immédiate), puis sauvegarde le projet entier (PUT /projects).

Deux états indépendants : la copie locale et le store serveur. Ils ne se parlent que par
save (PUT) et refresh (GET /state). Si une sauvegarde échoue, on recharge l'état du
serveur qui fait foi ; pas de file de rejeu.

Usage :
    with httpx.Client(base_url="http://localhost:8080") as http:
        client = BoardClient(http)
        client.refresh()
        client.create_project("Site vitrine")
        client.add_task("Fix bug", "", "todo", "high")
"""

import logging
from typing import Any, Callable, Optional

import httpx

from projectboard.domain import mutations
from projectboard.domain.models import AppState, Project

logger = logging.getLogger(__name__)


class BoardClient:
    def __init__(self, http: httpx.Client, *, api_prefix: str = "/api/v1"):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")
        self.state = AppState()

    # --------------- Helpers ---------------

    def _url(self, path: str) -> str:
        return f"{self.api_prefix}{path}"

    def _send(self, method: str, path: str, body: Any = None) -> httpx.Response:
        response = self.http.request(method, self._url(path), json=body)
        response.raise_for_status()
        return response

    @staticmethod
    def _dump(value) -> Any:
        return value.model_dump(mode="json", by_alias=True)

    def _replace_project(self, project: Project) -> None:
        self.state = self.state.model_copy(
            update={"projects": [project if p.id == project.id else p for p in self.state.projects]}
        )

    @property
    def active_project(self) -> Optional[Project]:
        if self.state.active_project_id is None:
            return None
        return self.state.get_project(self.state.active_project_id)

    # --------------- Synchronisation ---------------

    def refresh(self) -> AppState:
        """Recharge l'état qui fait foi depuis le serveur."""
        response = self._send("GET", "/state")
        self.state = AppState.model_validate(response.json())
        return self.state

    def save(self, project: Project) -> bool:
        """PUT du projet entier ; en cas d'échec, recharge l'état serveur et retourne False."""
        try:
            self._send("PUT", "/projects", self._dump(project))
            return True
        except httpx.HTTPError as e:
            logger.warning("Sauvegarde du projet %s impossible (%s), rechargement de l'état serveur", project.id, e)
            self.refresh()
            return False

    def apply(self, mutate: Callable[..., Project], *args: Any, **kwargs: Any) -> Optional[Project]:
        """
        Applique une opération du moteur au projet actif, localement puis côté serveur.
        Sans projet actif : rien. Opération sans effet : pas d'appel réseau.
        """
        project = self.active_project
        if project is None:
            return None
        updated = mutate(project, *args, **kwargs)
        if updated is project:
            return project
        self._replace_project(updated)
        self.save(updated)
        return self.active_project

    # --------------- Projets ---------------

    def create_project(self, name: str, description: str = "") -> Project:
        project = mutations.new_project(name, description)
        self.state = self.state.model_copy(
            update={"projects": [project, *self.state.projects], "active_project_id": project.id}
        )
        try:
            self._send("POST", "/projects", self._dump(project))
            self._send("PATCH", "/state", {"activeProjectId": project.id})
        except httpx.HTTPError as e:
            logger.warning("Création du projet %s impossible (%s)", project.id, e)
            self.refresh()
        return project

    def delete_project(self, project_id: str) -> None:
        active = None if self.state.active_project_id == project_id else self.state.active_project_id
        self.state = AppState(
            projects=[p for p in self.state.projects if p.id != project_id],
            active_project_id=active,
        )
        try:
            self._send("DELETE", "/projects", {"projectId": project_id})
        except httpx.HTTPError as e:
            logger.warning("Suppression du projet %s impossible (%s)", project_id, e)
            self.refresh()

    def set_active_project(self, project_id: Optional[str]) -> None:
        self.state = self.state.model_copy(update={"active_project_id": project_id})
        try:
            self._send("PATCH", "/state", {"activeProjectId": project_id})
        except httpx.HTTPError as e:
            logger.warning("Changement de projet actif impossible (%s)", e)
            self.refresh()

    # --------------- Board (projet actif) ---------------

    def add_task(self, title: str, description: str, column_id: str, priority: str = "medium"):
        return self.apply(mutations.add_task, title, description, column_id, priority)

    def update_task(self, task_id: str, **changes: Any):
        return self.apply(mutations.update_task, task_id, **changes)

    def delete_task(self, task_id: str):
        return self.apply(mutations.delete_task, task_id)

    def move_task(self, task_id: str, from_column_id: str, to_column_id: str, new_index: int):
        return self.apply(mutations.move_task, task_id, from_column_id, to_column_id, new_index)

    def add_column(self, title: str):
        return self.apply(mutations.add_column, title)

    def delete_column(self, column_id: str):
        return self.apply(mutations.delete_column, column_id)

    def update_column_title(self, column_id: str, title: str):
        return self.apply(mutations.update_column_title, column_id, title)

    def add_todo(self, title: str, priority: str = "medium"):
        return self.apply(mutations.add_todo, title, priority)

    def toggle_todo(self, todo_id: str):
        return self.apply(mutations.toggle_todo, todo_id)

    def delete_todo(self, todo_id: str):
        return self.apply(mutations.delete_todo, todo_id)

    def promote_todo(self, todo_id: str, column_id: str = "todo"):
        return self.apply(mutations.promote_todo, todo_id, column_id)

    # --------------- Export / import ---------------

    def export_state(self) -> AppState:
        return AppState.model_validate(self._send("GET", "/export").json())

    def import_state(self, state: AppState) -> AppState:
        self._send("POST", "/import", self._dump(state))
        return self.refresh()
