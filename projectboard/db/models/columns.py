from sqlmodel import Field

from .base import ProjectChildDB


class ColumnRow(ProjectChildDB, table=True):
    """Colonne du board ; `position` = rang de la colonne dans le projet."""

    __tablename__ = "columns"

    title: str = Field(nullable=False)
    position: int = Field(nullable=False)
