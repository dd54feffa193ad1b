"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) :

crée l'instance FastAPI (titre, version, tags, schéma OpenAPI custom)

construit le moteur SQL et LE ProjectStore de l'application (app.state.store)

configure CORS, inclut les routers sous API_PREFIX (ex : /api/v1/state)

initialise le schéma au démarrage (lifespan).

🔹 Avantages :

Point unique d'exécution : uvicorn projectboard.main:app --reload.

Les tests créent leur propre app sur une base en mémoire : create_app(Settings(DATABASE_URL="sqlite://")).
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from projectboard.api.v1.routers import board, projects, state, transfer
from projectboard.core.config import Settings, settings
from projectboard.core.logging import setup_logging
from projectboard.core.openapi import custom_openapi
from projectboard.db.session import build_engine
from projectboard.db.store import ProjectStore

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    engine = build_engine(app_settings.DATABASE_URL, echo=app_settings.DB_ECHO)
    store = ProjectStore(engine)

    # Démarrage / arrêt
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init_schema()
        logger.info("%s prêt (%s)", app_settings.APP_NAME, engine.url)
        yield
        engine.dispose()

    app = FastAPI(
        title=app_settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "state", "description": "État complet et projet actif"},
            {"name": "projects", "description": "CRUD projet entier"},
            {"name": "board", "description": "Opérations sur les colonnes, tâches et todos d'un projet"},
            {"name": "transfer", "description": "Export / import de toutes les données"},
        ],
    )
    app.state.settings = app_settings
    app.state.store = store

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Routers
    app.include_router(state.router, prefix=app_settings.API_PREFIX)
    app.include_router(projects.router, prefix=app_settings.API_PREFIX)
    app.include_router(board.router, prefix=app_settings.API_PREFIX)
    app.include_router(transfer.router, prefix=app_settings.API_PREFIX)

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)

    return app


app = create_app()

if __name__ == "__main__":
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)  # http://localhost:8080
