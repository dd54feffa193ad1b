"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient les classes héritant de SQLModel.

Ici on représente les propriétés communes des tables rattachées à un projet
(colonnes, tâches, todos) : clé primaire composite (project_id, id), pour que les ids
fixes des colonnes par défaut ("backlog", "todo"...) puissent exister dans chaque projet.

La suppression d'un projet supprime ses lignes filles (ON DELETE CASCADE).
"""

from sqlmodel import SQLModel, Field


class ProjectChildDB(SQLModel, table=False):
    project_id: str = Field(
        primary_key=True,
        foreign_key="projects.id",
        ondelete="CASCADE",
    )
    id: str = Field(primary_key=True)
