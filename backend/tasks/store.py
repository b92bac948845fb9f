"""
Task persistence on top of the Django ORM.

Every method is a direct query against the database; the store keeps no
state of its own, so constructing one per request is cheap.
"""

import logging
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from .models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """CRUD access to the tasks table."""

    def list(self) -> List[Task]:
        return list(Task.objects.order_by('start_date', 'id'))

    def get(self, task_id: int) -> Optional[Task]:
        return Task.objects.filter(pk=task_id).first()

    def count(self) -> int:
        return Task.objects.count()

    def create(self, fields: dict) -> Task:
        task = Task.objects.create(**fields)
        logger.info("Task created id=%s name=%r", task.pk, task.name)
        return task

    def update(self, task_id: int, fields: dict) -> Optional[Task]:
        """
        Merge the given fields into an existing task.

        Fields not present in `fields` keep their stored values.
        Returns None when no task has this id.
        """
        with transaction.atomic():
            task = Task.objects.select_for_update().filter(pk=task_id).first()
            if task is None:
                return None
            for name, value in fields.items():
                setattr(task, name, value)
            if fields:
                task.save(update_fields=list(fields))
        logger.info("Task updated id=%s fields=%s", task_id, sorted(fields))
        return task

    def delete(self, task_id: int) -> bool:
        deleted, _ = Task.objects.filter(pk=task_id).delete()
        if deleted:
            logger.info("Task deleted id=%s", task_id)
        return bool(deleted)

    def list_overdue(self, now=None) -> List[Task]:
        """Tasks whose end date has passed and that are not done, as of `now`."""
        if now is None:
            now = timezone.now()
        return list(
            Task.objects.filter(end_date__lt=now)
            .exclude(status=TaskStatus.DONE)
            .order_by('end_date', 'id')
        )
