"""
➡️ But : Configurer le moteur SQL (SQLite par défaut) et créer le schéma.

build_engine(url) : connexion à la base, avec les réglages SQLite nécessaires
(clés étrangères actives, WAL, pool statique pour la base en mémoire des tests).

init_db(engine) : crée les tables si elles n'existent pas et insère la ligne app_state (id = 1).

Pas de moteur global : create_app() construit un moteur par application et le passe
au ProjectStore. Chaque test peut ainsi avoir sa propre base en mémoire.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Import all models for creating all tables
from projectboard.db.models.projects import ProjectRow  # noqa: F401
from projectboard.db.models.columns import ColumnRow  # noqa: F401
from projectboard.db.models.tasks import TaskRow  # noqa: F401
from projectboard.db.models.todos import TodoRow  # noqa: F401
from projectboard.db.models.app_state import AppStateRow

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    database = make_url(url).database
    return not database or database == ":memory:"


def build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    kwargs: Dict[str, Any] = {"echo": echo}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            # une seule connexion partagée, sinon chaque connexion voit une base vide
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True  # utile pour Postgres/MySQL

    engine = create_engine(url, **kwargs)

    if is_sqlite:
        use_wal = not _is_memory_sqlite(url)

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            if use_wal:
                cursor.execute("PRAGMA journal_mode = WAL")
            cursor.close()

    return engine


def ensure_sqlite_dir(url: str) -> None:
    """Crée le dossier du fichier SQLite (ex: data/) s'il n'existe pas."""
    if not url.startswith("sqlite:") or _is_memory_sqlite(url):
        return
    Path(make_url(url).database).parent.mkdir(parents=True, exist_ok=True)


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas et la ligne app_state singleton.
    Idempotent : peut être rappelé à chaque démarrage.
    """
    ensure_sqlite_dir(str(engine.url))
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        if session.get(AppStateRow, 1) is None:
            session.add(AppStateRow(id=1, active_project_id=None))
            session.commit()
            logger.info("Ligne app_state initialisée")
