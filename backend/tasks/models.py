from django.db import models


class TaskStatus(models.TextChoices):
    TODO = 'todo', 'To do'
    IN_PROGRESS = 'in-progress', 'In progress'
    DONE = 'done', 'Done'


class Task(models.Model):
    """
    Task model representing a scheduled work item on the project timeline.

    Attributes:
        name: Short title of the task
        segment: Free-text grouping label (project phase, team, ...)
        start_date: When work on the task starts
        end_date: When the task is due
        progress: Completion percentage, expected 0-100
        status: One of todo, in-progress, done
        description: Optional longer text
        assignee: Optional name of the person doing the work
        is_overdue: Stored flag; never trusted, see compute_is_overdue()
    """
    name = models.TextField()
    segment = models.TextField(default='General')
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    progress = models.IntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=TaskStatus.choices,
        default=TaskStatus.TODO,
    )
    description = models.TextField(blank=True, null=True)
    assignee = models.TextField(blank=True, null=True)
    is_overdue = models.BooleanField(default=False, null=True)

    class Meta:
        ordering = ['start_date', 'id']

    def __str__(self):
        return self.name

    def compute_is_overdue(self, now):
        return self.end_date < now and self.status != TaskStatus.DONE
