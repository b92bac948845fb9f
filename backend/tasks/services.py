"""
Task service layer.

Sits between the HTTP views and the store: validates input before any
write, recomputes the derived overdue flag on every read, and turns store
absence into TaskNotFound.
"""

from django.utils import timezone

from .notifications import build_notifier, run_overdue_check
from .serializers import TaskSerializer, first_error
from .store import TaskStore


class TaskServiceError(Exception):
    pass


class TaskValidationError(TaskServiceError):
    def __init__(self, field, message):
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field
        self.message = message


class TaskNotFound(TaskServiceError):
    def __init__(self, task_id):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskService:
    """
    Task operations with explicit dependencies.

    Args:
        store: object implementing the TaskStore interface
        notifier: overdue notifier, or None when no provider is configured
        now: callable returning the current aware datetime
    """

    def __init__(self, store, notifier=None, now=None):
        self.store = store
        self.notifier = notifier
        self.now = now or timezone.now

    def _with_overdue(self, task, now=None):
        task.is_overdue = task.compute_is_overdue(now or self.now())
        return task

    def _validate(self, data, partial):
        serializer = TaskSerializer(data=data, partial=partial)
        if not serializer.is_valid():
            field, message = first_error(serializer.errors)
            raise TaskValidationError(field, message)
        return dict(serializer.validated_data)

    def list_tasks(self):
        now = self.now()
        return [self._with_overdue(task, now) for task in self.store.list()]

    def get_task(self, task_id):
        task = self.store.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return self._with_overdue(task)

    def create_task(self, data):
        fields = self._validate(data, partial=False)
        return self._with_overdue(self.store.create(fields))

    def update_task(self, task_id, data):
        fields = self._validate(data, partial=True)
        task = self.store.update(task_id, fields)
        if task is None:
            raise TaskNotFound(task_id)
        return self._with_overdue(task)

    def delete_task(self, task_id):
        self.store.delete(task_id)

    def check_overdue(self):
        return run_overdue_check(self.store, self.notifier, self.now())


def build_task_service():
    """Assemble a service backed by the database and the configured notifier."""
    return TaskService(store=TaskStore(), notifier=build_notifier())
