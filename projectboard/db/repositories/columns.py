from projectboard.db.repositories.base import ProjectChildRepository
from projectboard.db.models.columns import ColumnRow


class ColumnRepository(ProjectChildRepository[ColumnRow]):
    model = ColumnRow
