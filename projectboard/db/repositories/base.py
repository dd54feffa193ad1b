from typing import Any, Generic, Iterable, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select

# Type générique pour le modèle (ProjectRow, TaskRow, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Ne commit jamais : la transaction appartient au ProjectStore (session.begin()).
       Les écritures font un flush pour remonter les erreurs SQL au plus tôt.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(self) -> Sequence[ModelT]:
        return self.session.exec(select(self.model)).all()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par sa clé primaire, ou None."""
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def add_all(self, entities: Iterable[ModelT]) -> None:
        self.session.add_all(list(entities))
        self.session.flush()

    def create(self, **fields) -> ModelT:
        entity = self.model(**fields)
        self.session.add(entity)
        self.session.flush()
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self.session.flush()
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.flush()

    def delete_all(self) -> int:
        rows = self.list()
        for row in rows:
            self.session.delete(row)
        self.session.flush()
        return len(rows)


class ProjectChildRepository(BaseRepository[ModelT]):
    """CRUD des tables filles d'un projet (colonnes, tâches, todos)."""

    def list_for_project(self, project_id: str) -> Sequence[ModelT]:
        stmt = (
            select(self.model)
            .where(self.model.project_id == project_id)
            .order_by(self.model.position)
        )
        return self.session.exec(stmt).all()

    def list_ordered(self) -> Sequence[ModelT]:
        """Toutes les lignes, groupables par projet, triées par position."""
        stmt = select(self.model).order_by(self.model.project_id, self.model.position)
        return self.session.exec(stmt).all()

    def delete_for_project(self, project_id: str) -> int:
        rows = self.session.exec(
            select(self.model).where(self.model.project_id == project_id)
        ).all()
        for row in rows:
            self.session.delete(row)
        self.session.flush()
        return len(rows)
