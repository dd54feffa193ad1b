"""
Projets de démonstration chargés depuis un YAML.

Format :

active: "Site vitrine"        # nom du projet actif (optionnel)
projects:
  - name: "Site vitrine"
    description: "..."
    columns: ["Idées"]        # colonnes ajoutées après les 4 par défaut (optionnel)
    tasks:
      - {title: "Maquette", column: "todo", priority: "high", description: "..."}
    todos:
      - {title: "Acheter un nom de domaine", priority: "low", completed: true}

Les projets sont construits avec le moteur de mutations (mêmes règles que l'API),
puis importés d'un bloc dans le store.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from projectboard.db.store import ProjectStore
from projectboard.domain import mutations
from projectboard.domain.models import AppState, Project, format_iso

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
        raise ValueError("Le YAML de seed doit contenir un objet racine avec une liste 'projects'.")
    return data


# -----------------------------
# Helpers
# -----------------------------
def _column_id_for(project: Project, key: str) -> str:
    """Accepte l'id (ex: "todo") ou le titre (ex: "To Do") d'une colonne."""
    for column in project.columns:
        if key in (column.id, column.title):
            return column.id
    raise ValueError(f"Colonne inconnue dans le seed: {key!r} (projet {project.name!r})")


def build_project(entry: Dict[str, Any]) -> Project:
    project = mutations.new_project(entry["name"], entry.get("description", ""))

    for title in entry.get("columns", []):
        project = mutations.add_column(project, title)

    for task in entry.get("tasks", []):
        project = mutations.add_task(
            project,
            task["title"],
            task.get("description", ""),
            _column_id_for(project, task.get("column", "backlog")),
            task.get("priority", "medium"),
        )

    for todo in entry.get("todos", []):
        project = mutations.add_todo(project, todo["title"], todo.get("priority", "medium"))
        if todo.get("completed"):
            project = mutations.toggle_todo(project, project.todos[-1].id)

    return project


def build_state(data: Dict[str, Any]) -> AppState:
    """
    L'ordre du YAML devient l'ordre d'affichage (du plus récent au plus ancien) :
    created_at est décalé d'une seconde par projet pour que le tri soit déterministe.
    """
    now = datetime.now(timezone.utc)
    projects: List[Project] = []
    for rank, entry in enumerate(data["projects"]):
        project = build_project(entry)
        created_at = format_iso(now - timedelta(seconds=rank))
        projects.append(
            project.model_copy(
                update={"created_at": created_at, "updated_at": max(created_at, project.updated_at)}
            )
        )

    active: Optional[str] = None
    if data.get("active"):
        active = next((p.id for p in projects if p.name == data["active"]), None)
    return AppState(projects=projects, active_project_id=active)


# -----------------------------
# Seed
# -----------------------------
def seed_all(store: ProjectStore, seed_path: str | Path, *, force: bool = False) -> Optional[AppState]:
    """
    Importe les projets du YAML. Ne fait rien si la base contient déjà des projets
    (sauf force=True, qui remplace TOUT).
    """
    if not force and store.get_app_state().projects:
        logger.info("Seed ignoré: la base contient déjà des projets")
        return None

    state = build_state(load_seed_yaml(seed_path))
    store.import_from_json(state.model_dump(mode="json", by_alias=True))
    logger.info("Seed: %d projet(s) importé(s) depuis %s", len(state.projects), seed_path)
    return state
