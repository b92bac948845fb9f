from django.core.management.base import BaseCommand

from tasks.bootstrap import seed_demo_tasks
from tasks.store import TaskStore


class Command(BaseCommand):
    help = 'Insert demo tasks when the task table is empty.'

    def handle(self, *args, **options):
        created = seed_demo_tasks(TaskStore())
        if created:
            self.stdout.write(self.style.SUCCESS(f'Seeded {created} demo tasks.'))
        else:
            self.stdout.write('Tasks already present, nothing to seed.')
