# projectboard/db/repositories/projects.py
from typing import Sequence
from sqlmodel import select

from projectboard.db.repositories.base import BaseRepository
from projectboard.db.models.projects import ProjectRow


class ProjectRepository(BaseRepository[ProjectRow]):
    model = ProjectRow

    def list_newest_first(self) -> Sequence[ProjectRow]:
        """Projets du plus récent au plus ancien (created_at DESC)."""
        stmt = select(self.model).order_by(self.model.created_at.desc())
        return self.session.exec(stmt).all()
