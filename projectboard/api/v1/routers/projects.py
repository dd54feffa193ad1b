"""
➡️ But : CRUD "projet entier" (le client calcule le projet, le serveur le stocke).

POST   /projects      : Project complet -> { success, project }
PUT    /projects      : Project complet -> { success } (remplace colonnes/tâches/todos)
DELETE /projects      : { projectId }   -> { success }
POST   /projects/new  : { name, description } -> Project avec les colonnes par défaut, activé
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from projectboard.api.v1.dependencies import get_board_service, get_store
from projectboard.core.errors import NotFoundError, StorageError
from projectboard.db.store import ProjectStore
from projectboard.domain.models import Project
from projectboard.features.board.services import BoardService
from projectboard.features.projects.schemas import (
    ProjectCreatedOut,
    ProjectDeleteIn,
    ProjectNewIn,
    SuccessOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
    responses={500: {"description": "Storage failure"}},
)


@router.post(
    "",
    summary="Créer un projet (valeur complète fournie par le client)",
    response_model=ProjectCreatedOut,
)
def create_project(project: Project, store: ProjectStore = Depends(get_store)):
    try:
        store.create_project(project)
    except StorageError as e:
        logger.error("Error creating project: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create project")
    return ProjectCreatedOut(project=project)


@router.post(
    "/new",
    summary="Créer un projet vide avec les colonnes par défaut",
    status_code=status.HTTP_201_CREATED,
    response_model=Project,
)
def create_blank_project(payload: ProjectNewIn, svc: BoardService = Depends(get_board_service)):
    try:
        return svc.create_project(payload.name, payload.description)
    except StorageError as e:
        logger.error("Error creating project: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create project")


@router.put(
    "",
    summary="Remplacer un projet",
    response_model=SuccessOut,
    responses={404: {"description": "Not Found"}},
)
def update_project(project: Project, store: ProjectStore = Depends(get_store)):
    try:
        store.update_project(project)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    except StorageError as e:
        logger.error("Error updating project: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update project")
    return SuccessOut()


@router.delete(
    "",
    summary="Supprimer un projet",
    response_model=SuccessOut,
)
def delete_project(payload: ProjectDeleteIn, store: ProjectStore = Depends(get_store)):
    try:
        store.delete_project(payload.project_id)
    except StorageError as e:
        logger.error("Error deleting project: %s", e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete project")
    return SuccessOut()
