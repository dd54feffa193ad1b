from sqlmodel import SQLModel, Field


class ProjectRow(SQLModel, table=True):
    """Ligne projet : uniquement les champs scalaires, le board vit dans les tables filles."""

    __tablename__ = "projects"

    id: str = Field(primary_key=True)
    name: str = Field(nullable=False)
    description: str = Field(default="")

    # Horodatages ISO-8601 conservés tels quels (export/import à l'identique)
    created_at: str = Field(index=True, nullable=False)
    updated_at: str = Field(nullable=False)
