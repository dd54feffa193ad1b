"""
➡️ But : Export / import de l'état complet (sauvegarde, migration d'une machine à l'autre).

GET  /export : AppState complet, en pièce jointe project-manager-export-<date>.json
POST /import : remplace TOUTES les données ; 400 si `projects` n'est pas une liste
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from projectboard.api.v1.dependencies import get_store
from projectboard.core.errors import InvalidInputError, StorageError
from projectboard.db.store import ProjectStore
from projectboard.features.projects.schemas import ImportOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transfer"])


def export_filename() -> str:
    return f"project-manager-export-{datetime.now(timezone.utc).date().isoformat()}.json"


@router.get(
    "/export",
    summary="Exporter toutes les données",
    responses={200: {"description": "AppState complet (pièce jointe JSON)"}},
)
def export_data(store: ProjectStore = Depends(get_store)):
    try:
        state = store.export_state()
    except StorageError as e:
        logger.error("Error exporting data: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export data")
    return JSONResponse(
        content=state.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post(
    "/import",
    summary="Importer un export (remplace tout)",
    response_model=ImportOut,
    responses={400: {"description": "Invalid data format"}},
)
def import_data(payload: Any = Body(...), store: ProjectStore = Depends(get_store)):
    try:
        store.import_from_json(payload)
    except InvalidInputError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data format")
    except StorageError as e:
        logger.error("Error importing data: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to import data")
    return ImportOut()
