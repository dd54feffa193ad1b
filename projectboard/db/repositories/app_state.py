from typing import Optional

from projectboard.db.repositories.base import BaseRepository
from projectboard.db.models.app_state import AppStateRow


class AppStateRepository(BaseRepository[AppStateRow]):
    """Accès à la ligne singleton app_state (id = 1)."""

    model = AppStateRow

    def _row(self) -> AppStateRow:
        row = self.get(1)
        if row is None:
            # init_db() la crée normalement ; recréée si une base a été vidée à la main
            row = self.create(id=1, active_project_id=None)
        return row

    def get_active_project_id(self) -> Optional[str]:
        row = self.get(1)
        return row.active_project_id if row else None

    def set_active_project_id(self, project_id: Optional[str]) -> None:
        self.update(self._row(), active_project_id=project_id)
