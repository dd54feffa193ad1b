"""
➡️ But : Centraliser les dépendances réutilisables des routes.

get_store()         : le ProjectStore de l'application (créé une fois par create_app()).
get_board_service() : BoardService branché sur ce store.

🔹 Avantages :

Pas de singleton de module : chaque app (et chaque test) a son propre store.

Facile à surcharger dans les tests (app.dependency_overrides).
"""

from fastapi import Depends, Request

from projectboard.db.store import ProjectStore
from projectboard.features.board.services import BoardService


def get_store(request: Request) -> ProjectStore:
    return request.app.state.store


def get_board_service(store: ProjectStore = Depends(get_store)) -> BoardService:
    return BoardService(store)
