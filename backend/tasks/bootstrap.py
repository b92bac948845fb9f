import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from .models import TaskStatus

logger = logging.getLogger(__name__)


def demo_tasks(now):
    """Demo tasks relative to `now`: one done, two in progress (one overdue), one todo."""
    day = timedelta(days=1)
    return [
        {
            'name': 'Project Kickoff',
            'start_date': now - 2 * day,
            'end_date': now - day,
            'progress': 100,
            'status': TaskStatus.DONE,
            'assignee': 'Alice',
            'description': 'Initial meeting with stakeholders',
        },
        {
            'name': 'Design Phase',
            'start_date': now,
            'end_date': now + 5 * day,
            'progress': 30,
            'status': TaskStatus.IN_PROGRESS,
            'assignee': 'Bob',
            'description': 'Create UI/UX mockups',
        },
        {
            'name': 'Backend Setup',
            'start_date': now + day,
            'end_date': now + 7 * day,
            'progress': 10,
            'status': TaskStatus.TODO,
            'assignee': 'Charlie',
            'description': 'Setup DB and API',
        },
        {
            'name': 'Legacy Migration',
            'start_date': now - 10 * day,
            'end_date': now - 2 * day,
            'progress': 50,
            'status': TaskStatus.IN_PROGRESS,
            'assignee': 'Dave',
            'description': 'Migrate old data',
        },
    ]


def seed_demo_tasks(store, now=None):
    """
    Insert the demo tasks if the store is empty.

    Safe to call repeatedly: once any task exists nothing is written.
    The check and the inserts share one transaction, so a failed insert
    leaves the store empty. Run it from a single process (the seed_tasks
    command), not from every web worker.
    Returns the number of tasks created.
    """
    if now is None:
        now = timezone.now()
    with transaction.atomic():
        if store.count() > 0:
            return 0
        logger.info("Seeding database...")
        tasks = demo_tasks(now)
        for fields in tasks:
            store.create(fields)
    return len(tasks)
