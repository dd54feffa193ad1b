from projectboard.db.repositories.base import ProjectChildRepository
from projectboard.db.models.tasks import TaskRow


class TaskRepository(ProjectChildRepository[TaskRow]):
    model = TaskRow
