from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field


class AppStateRow(SQLModel, table=True):
    """Ligne singleton (id = 1) : pointeur vers le projet actif, ou NULL."""

    __tablename__ = "app_state"
    __table_args__ = (
        CheckConstraint("id = 1", name="ck_app_state_singleton"),
    )

    id: int = Field(default=1, primary_key=True)
    active_project_id: Optional[str] = Field(default=None)
