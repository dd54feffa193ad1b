from projectboard.db.repositories.base import ProjectChildRepository
from projectboard.db.models.todos import TodoRow


class TodoRepository(ProjectChildRepository[TodoRow]):
    model = TodoRow
