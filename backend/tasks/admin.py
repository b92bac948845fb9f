from django.contrib import admin
from django.utils import timezone

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['name', 'segment', 'start_date', 'end_date', 'status', 'progress', 'assignee', 'overdue']
    list_filter = ['status', 'segment']
    search_fields = ['name', 'assignee', 'description']
    ordering = ['start_date', 'id']
    exclude = ['is_overdue']

    @admin.display(boolean=True, description='Overdue')
    def overdue(self, obj):
        return obj.compute_is_overdue(timezone.now())
