"""
➡️ But : Corps des requêtes d'opérations sur le board d'un projet.

Chaque route d'opération renvoie le Project obtenu (domain.models.Project).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from projectboard.domain.models import Priority


class _CamelIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectDetailsIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class TaskCreateIn(_CamelIn):
    title: str = Field(..., examples=["Fix bug"])
    description: str = ""
    column_id: str = Field(..., examples=["todo"])
    priority: Priority = "medium"


class TaskUpdateIn(_CamelIn):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    # ne déplace pas la tâche sur le board : utiliser /move
    column_id: Optional[str] = None


class TaskMoveIn(_CamelIn):
    from_column_id: str
    to_column_id: str
    new_index: int = Field(..., ge=0)


class ColumnCreateIn(BaseModel):
    title: str = Field(..., min_length=1, examples=["Review"])


class ColumnRenameIn(BaseModel):
    title: str = Field(..., min_length=1)


class TodoCreateIn(BaseModel):
    title: str = Field(..., min_length=1, examples=["Acheter du lait"])
    priority: Priority = "medium"


class TodoPromoteIn(_CamelIn):
    column_id: str = Field("todo", examples=["todo"])
