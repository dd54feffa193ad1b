"""
➡️ But : Store de l'agrégat Projet, seule porte d'entrée vers la base.

ProjectStore(engine) :
- possède le schéma (init_schema, idempotent)
- lit l'AppState complet (projets + pointeur de projet actif)
- crée / remplace / supprime un projet entier
- importe (remplacement total) / exporte l'état complet

Chaque écriture multi-lignes tourne dans UNE transaction (session.begin()) :
un lecteur concurrent ne voit jamais un projet à moitié écrit.

Pas de verrou ni de versioning : entre une lecture et l'écriture suivante,
un autre écrivain peut passer, le dernier PUT d'un projet gagne (projet entier).
Accepté pour un outil mono-utilisateur.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from projectboard.core.errors import InvalidInputError, NotFoundError, StorageError
from projectboard.db.mapper import column_rows, from_rows, project_row, to_rows
from projectboard.db.repositories.app_state import AppStateRepository
from projectboard.db.repositories.columns import ColumnRepository
from projectboard.db.repositories.projects import ProjectRepository
from projectboard.db.repositories.tasks import TaskRepository
from projectboard.db.repositories.todos import TodoRepository
from projectboard.db.session import init_db
from projectboard.domain.models import AppState, Project

logger = logging.getLogger(__name__)


class _Repos:
    """Les repositories d'une même session (donc d'une même transaction)."""

    def __init__(self, session: Session):
        self.session = session
        self.projects = ProjectRepository(session)
        self.columns = ColumnRepository(session)
        self.tasks = TaskRepository(session)
        self.todos = TodoRepository(session)
        self.app_state = AppStateRepository(session)


class ProjectStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    # ---------- Helpers ----------

    @contextmanager
    def _transaction(self, action: str) -> Iterator[_Repos]:
        """Ouvre une session + transaction ; commit à la sortie, rollback sur erreur."""
        try:
            with Session(self.engine) as session, session.begin():
                yield _Repos(session)
        except SQLAlchemyError as e:
            logger.error("Échec de la transaction '%s': %s", action, e)
            raise StorageError(f"Failed to {action}") from e

    @staticmethod
    def _insert(repos: _Repos, project: Project) -> None:
        repos.projects.add_all([project_row(project)])
        repos.columns.add_all(column_rows(project))

    @staticmethod
    def _replace(repos: _Repos, project: Project) -> None:
        entity = repos.projects.get(project.id)
        if entity is None:
            raise NotFoundError(f"Project {project.id} not found")

        repos.projects.update(
            entity,
            name=project.name,
            description=project.description,
            updated_at=project.updated_at,
        )
        repos.tasks.delete_for_project(project.id)
        repos.columns.delete_for_project(project.id)
        repos.todos.delete_for_project(project.id)

        rows = to_rows(project)
        repos.columns.add_all(rows.columns)
        repos.tasks.add_all(rows.tasks)
        repos.todos.add_all(rows.todos)

    @staticmethod
    def _load(repos: _Repos, entity) -> Project:
        return from_rows(
            entity,
            repos.columns.list_for_project(entity.id),
            repos.tasks.list_for_project(entity.id),
            repos.todos.list_for_project(entity.id),
        )

    # ---------- Schema ----------

    def init_schema(self) -> None:
        try:
            init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error("Initialisation du schéma impossible: %s", e)
            raise StorageError("Failed to initialize schema") from e

    # ---------- READ ----------

    def get_app_state(self) -> AppState:
        with self._transaction("fetch state") as repos:
            entities = repos.projects.list_newest_first()

            columns: Dict[str, List[Any]] = {}
            for row in repos.columns.list_ordered():
                columns.setdefault(row.project_id, []).append(row)
            tasks: Dict[str, List[Any]] = {}
            for row in repos.tasks.list_ordered():
                tasks.setdefault(row.project_id, []).append(row)
            todos: Dict[str, List[Any]] = {}
            for row in repos.todos.list_ordered():
                todos.setdefault(row.project_id, []).append(row)

            projects = [
                from_rows(e, columns.get(e.id, []), tasks.get(e.id, []), todos.get(e.id, []))
                for e in entities
            ]
            return AppState(
                projects=projects,
                active_project_id=repos.app_state.get_active_project_id(),
            )

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._transaction("fetch project") as repos:
            entity = repos.projects.get(project_id)
            if entity is None:
                return None
            return self._load(repos, entity)

    def export_state(self) -> AppState:
        return self.get_app_state()

    # ---------- WRITE ----------

    def set_active_project(self, project_id: Optional[str]) -> None:
        with self._transaction("update active project") as repos:
            repos.app_state.set_active_project_id(project_id)

    def create_project(self, project: Project) -> Project:
        """Insère la ligne projet et ses colonnes (un projet neuf n'a ni tâches ni todos)."""
        with self._transaction("create project") as repos:
            self._insert(repos, project)
        logger.info("Projet créé: %s (%s)", project.id, project.name)
        return project

    def update_project(self, project: Project) -> None:
        """Remplace toutes les lignes du projet (colonnes, tâches, todos) en une transaction."""
        problems = project.consistency_errors()
        if problems:
            logger.warning("Projet %s incohérent à l'écriture: %s", project.id, "; ".join(problems))
        with self._transaction("update project") as repos:
            self._replace(repos, project)

    def delete_project(self, project_id: str) -> None:
        """Supprime le projet (cascade vers ses lignes filles) ; no-op si absent."""
        with self._transaction("delete project") as repos:
            entity = repos.projects.get(project_id)
            if entity is None:
                return
            repos.projects.delete(entity)
            if repos.app_state.get_active_project_id() == project_id:
                repos.app_state.set_active_project_id(None)
        logger.info("Projet supprimé: %s", project_id)

    def import_from_json(self, payload: Any) -> AppState:
        """
        Remplace TOUTES les données par celles du payload.
        Contrôle de forme avant toute écriture : `projects` doit être une liste.
        Les colonnes importées sont reprises telles quelles (pas de colonnes par défaut).
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("projects"), list):
            raise InvalidInputError("Invalid data format")
        try:
            state = AppState.model_validate(payload)
        except ValidationError as e:
            raise InvalidInputError("Invalid data format") from e

        with self._transaction("import data") as repos:
            repos.todos.delete_all()
            repos.tasks.delete_all()
            repos.columns.delete_all()
            repos.projects.delete_all()

            for project in state.projects:
                self._insert(repos, project)
                self._replace(repos, project)

            repos.app_state.set_active_project_id(state.active_project_id)

        logger.info("Import terminé: %d projet(s)", len(state.projects))
        return state
