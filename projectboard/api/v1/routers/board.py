"""
➡️ But : Opérations unitaires sur le board d'un projet, calculées côté serveur.

Chaque route applique une opération du moteur de mutations et renvoie le Project obtenu.
Les ids absents (tâche déjà supprimée, todo inconnu...) sont des no-op, sauf :
- colonne inconnue à la création d'une tâche -> 404
- tâche inconnue à la mise à jour -> 404
"""

import logging
from contextlib import contextmanager

from fastapi import APIRouter, Depends, HTTPException, status

from projectboard.api.v1.dependencies import get_board_service
from projectboard.core.errors import InvalidInputError, NotFoundError, StorageError
from projectboard.domain.models import Project
from projectboard.features.board.schemas import (
    ColumnCreateIn,
    ColumnRenameIn,
    ProjectDetailsIn,
    TaskCreateIn,
    TaskMoveIn,
    TaskUpdateIn,
    TodoCreateIn,
    TodoPromoteIn,
)
from projectboard.features.board.services import BoardService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects/{project_id}",
    tags=["board"],
    responses={404: {"description": "Not Found"}, 500: {"description": "Storage failure"}},
)


# -------- Helpers --------

@contextmanager
def _http_errors(failure: str = "Failed to update project"):
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("%s: %s", failure, e.__cause__ or e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure)


# -----------------------------
# Projet
# -----------------------------
@router.get("", summary="Récupérer un projet", response_model=Project)
def get_project(project_id: str, svc: BoardService = Depends(get_board_service)):
    with _http_errors("Failed to fetch project"):
        return svc.get_project(project_id)


@router.patch("", summary="Renommer / décrire un projet", response_model=Project)
def update_details(project_id: str, payload: ProjectDetailsIn, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.update_details(project_id, name=payload.name, description=payload.description)


# -----------------------------
# Tâches
# -----------------------------
@router.post(
    "/tasks",
    summary="Ajouter une tâche en bas d'une colonne",
    status_code=status.HTTP_201_CREATED,
    response_model=Project,
)
def add_task(project_id: str, payload: TaskCreateIn, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.add_task(
            project_id,
            title=payload.title,
            description=payload.description,
            column_id=payload.column_id,
            priority=payload.priority,
        )


@router.patch(
    "/tasks/{task_id}",
    summary="Mettre à jour une tâche",
    description="Ne modifie que les champs fournis. Changer columnId ne déplace pas la tâche sur le board.",
    response_model=Project,
)
def update_task(
    project_id: str, task_id: str, payload: TaskUpdateIn, svc: BoardService = Depends(get_board_service)
):
    with _http_errors():
        return svc.update_task(project_id, task_id, **payload.model_dump(exclude_none=True))


@router.delete("/tasks/{task_id}", summary="Supprimer une tâche", response_model=Project)
def delete_task(project_id: str, task_id: str, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.delete_task(project_id, task_id)


@router.post("/tasks/{task_id}/move", summary="Déplacer une tâche", response_model=Project)
def move_task(project_id: str, task_id: str, payload: TaskMoveIn, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.move_task(
            project_id,
            task_id,
            from_column_id=payload.from_column_id,
            to_column_id=payload.to_column_id,
            new_index=payload.new_index,
        )


# -----------------------------
# Colonnes
# -----------------------------
@router.post(
    "/columns",
    summary="Ajouter une colonne",
    status_code=status.HTTP_201_CREATED,
    response_model=Project,
)
def add_column(project_id: str, payload: ColumnCreateIn, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.add_column(project_id, payload.title)


@router.patch("/columns/{column_id}", summary="Renommer une colonne", response_model=Project)
def rename_column(
    project_id: str, column_id: str, payload: ColumnRenameIn, svc: BoardService = Depends(get_board_service)
):
    with _http_errors():
        return svc.rename_column(project_id, column_id, payload.title)


@router.delete(
    "/columns/{column_id}",
    summary="Supprimer une colonne et ses tâches",
    response_model=Project,
)
def delete_column(project_id: str, column_id: str, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.delete_column(project_id, column_id)


# -----------------------------
# Todos
# -----------------------------
@router.post(
    "/todos",
    summary="Ajouter un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=Project,
)
def add_todo(project_id: str, payload: TodoCreateIn, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.add_todo(project_id, title=payload.title, priority=payload.priority)


@router.post("/todos/{todo_id}/toggle", summary="Cocher / décocher un todo", response_model=Project)
def toggle_todo(project_id: str, todo_id: str, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.toggle_todo(project_id, todo_id)


@router.delete("/todos/{todo_id}", summary="Supprimer un todo", response_model=Project)
def delete_todo(project_id: str, todo_id: str, svc: BoardService = Depends(get_board_service)):
    with _http_errors():
        return svc.delete_todo(project_id, todo_id)


@router.post(
    "/todos/{todo_id}/promote",
    summary="Transformer un todo en tâche",
    response_model=Project,
)
def promote_todo(
    project_id: str, todo_id: str, payload: TodoPromoteIn, svc: BoardService = Depends(get_board_service)
):
    with _http_errors():
        return svc.promote_todo(project_id, todo_id, column_id=payload.column_id)
