from sqlmodel import Field

from .base import ProjectChildDB


class TaskRow(ProjectChildDB, table=True):
    """
    Tâche du board.
    `position` = rang de la tâche dans la séquence de sa colonne (reconstruit task_ids à la lecture).
    """

    __tablename__ = "tasks"

    column_id: str = Field(index=True, nullable=False)
    title: str = Field(nullable=False)
    description: str = Field(default="")
    priority: str = Field(default="medium", nullable=False)
    position: int = Field(nullable=False)
    created_at: str = Field(nullable=False)
