from sqlmodel import Field

from .base import ProjectChildDB


class TodoRow(ProjectChildDB, table=True):
    __tablename__ = "todos"

    title: str = Field(nullable=False)
    completed: bool = Field(default=False, nullable=False)
    priority: str = Field(default="medium", nullable=False)
    # ordre de la liste de todos (ordre de création pour les todos ajoutés un par un)
    position: int = Field(default=0, nullable=False)
    created_at: str = Field(nullable=False)
