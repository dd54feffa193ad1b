"""
➡️ But : Lecture de l'état complet et pointeur de projet actif.

GET   /state : { projects, activeProjectId }
PATCH /state : { activeProjectId } -> { success: true }
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from projectboard.api.v1.dependencies import get_store
from projectboard.core.errors import StorageError
from projectboard.db.store import ProjectStore
from projectboard.domain.models import AppState
from projectboard.features.projects.schemas import ActiveProjectIn, SuccessOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/state",
    tags=["state"],
    responses={500: {"description": "Storage failure"}},
)


@router.get(
    "",
    summary="Récupérer l'état complet",
    description="Tous les projets (du plus récent au plus ancien) et l'id du projet actif.",
    response_model=AppState,
)
def get_state(store: ProjectStore = Depends(get_store)):
    try:
        return store.get_app_state()
    except StorageError as e:
        logger.error("Error fetching state: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch state")


@router.patch(
    "",
    summary="Changer de projet actif",
    response_model=SuccessOut,
)
def set_active_project(payload: ActiveProjectIn, store: ProjectStore = Depends(get_store)):
    try:
        store.set_active_project(payload.active_project_id)
    except StorageError as e:
        logger.error("Error updating active project: %s", e.__cause__ or e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update active project"
        )
    return SuccessOut()
