import smtplib
from datetime import date, datetime, timedelta, timezone as dt_timezone
from unittest import mock

from django.core import mail
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from .bootstrap import seed_demo_tasks
from .models import Task, TaskStatus
from .notifications import (
    EmailOverdueNotifier,
    NO_OVERDUE_MESSAGE,
    OverdueCheckOutcome,
    build_notifier,
    format_overdue_summary,
)
from .serializers import first_error
from .services import TaskNotFound, TaskService, TaskValidationError
from .store import TaskStore

NOW = datetime(2025, 11, 26, 12, 0, tzinfo=dt_timezone.utc)
DAY = timedelta(days=1)


class InMemoryTaskStore:
    """Store double keeping unsaved Task instances in a dict."""

    def __init__(self):
        self.tasks = {}
        self.next_id = 1

    def list(self):
        return sorted(self.tasks.values(), key=lambda t: (t.start_date, t.id))

    def get(self, task_id):
        return self.tasks.get(task_id)

    def count(self):
        return len(self.tasks)

    def create(self, fields):
        task = Task(id=self.next_id, **fields)
        self.tasks[task.id] = task
        self.next_id += 1
        return task

    def update(self, task_id, fields):
        task = self.tasks.get(task_id)
        if task is None:
            return None
        for name, value in fields.items():
            setattr(task, name, value)
        return task

    def delete(self, task_id):
        return self.tasks.pop(task_id, None) is not None

    def list_overdue(self, now=None):
        return [t for t in self.list() if t.end_date < now and t.status != TaskStatus.DONE]


class RecordingNotifier:
    def __init__(self, error=None):
        self.recipients = ['pm@example.com']
        self.error = error
        self.sent = []

    def send_overdue_summary(self, tasks):
        if self.error is not None:
            raise self.error
        self.sent.append(list(tasks))


class FailingTaskStore(TaskStore):
    """Database store whose create() raises after a number of inserts."""

    def __init__(self, fail_after):
        self.fail_after = fail_after
        self.created = 0

    def create(self, fields):
        if self.created >= self.fail_after:
            raise RuntimeError('insert failed')
        self.created += 1
        return super().create(fields)


def task_fields(**overrides):
    fields = {
        'name': 'Write report',
        'start_date': NOW - 2 * DAY,
        'end_date': NOW + 2 * DAY,
        'status': TaskStatus.TODO,
        'assignee': 'Alice',
    }
    fields.update(overrides)
    return fields


class TaskServiceTests(TestCase):
    """Tests for the service layer against an in-memory store."""

    def setUp(self):
        self.store = InMemoryTaskStore()
        self.service = TaskService(self.store, notifier=None, now=lambda: NOW)

    def test_list_recomputes_overdue_ignoring_stored_flag(self):
        """isOverdue is derived from dates and status, never from the stored column."""
        late = self.store.create(task_fields(name='Late', end_date=NOW - DAY, is_overdue=False))
        fine = self.store.create(task_fields(name='Fine', is_overdue=True))

        tasks = {t.name: t for t in self.service.list_tasks()}

        self.assertTrue(tasks['Late'].is_overdue)
        self.assertFalse(tasks['Fine'].is_overdue)
        self.assertEqual({late.id, fine.id}, {t.id for t in tasks.values()})

    def test_done_task_past_end_date_not_overdue(self):
        self.store.create(task_fields(end_date=NOW - DAY, status=TaskStatus.DONE))

        self.assertFalse(self.service.list_tasks()[0].is_overdue)

    def test_get_recomputes_overdue(self):
        task = self.store.create(task_fields(end_date=NOW - DAY, status=TaskStatus.IN_PROGRESS))

        self.assertTrue(self.service.get_task(task.id).is_overdue)

    def test_get_missing_task_raises_not_found(self):
        with self.assertRaises(TaskNotFound):
            self.service.get_task(42)

    def test_create_missing_name_is_rejected(self):
        """Missing name fails on field 'name' and nothing is persisted."""
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({'startDate': '2025-11-20', 'endDate': '2025-11-30'})

        self.assertEqual(ctx.exception.field, 'name')
        self.assertEqual(self.store.count(), 0)

    def test_create_blank_name_is_rejected(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({'name': '', 'startDate': '2025-11-20', 'endDate': '2025-11-30'})

        self.assertEqual(ctx.exception.field, 'name')

    def test_create_invalid_status_is_rejected(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({
                'name': 'A', 'startDate': '2025-11-20', 'endDate': '2025-11-30', 'status': 'blocked',
            })

        self.assertEqual(ctx.exception.field, 'status')
        self.assertEqual(self.store.count(), 0)

    def test_create_unparseable_date_is_rejected(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({'name': 'A', 'startDate': 'next tuesday', 'endDate': '2025-11-30'})

        self.assertEqual(ctx.exception.field, 'startDate')

    def test_create_non_object_body_is_rejected(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task(['not', 'an', 'object'])

        self.assertEqual(ctx.exception.field, '')

    def test_create_applies_defaults(self):
        task = self.service.create_task({
            'name': 'A', 'startDate': '2025-11-20T09:00:00Z', 'endDate': '2025-11-30',
        })

        self.assertEqual(task.id, 1)
        self.assertEqual(task.segment, 'General')
        self.assertEqual(task.progress, 0)
        self.assertEqual(task.status, TaskStatus.TODO)
        self.assertIsNone(task.assignee)
        self.assertFalse(task.is_overdue)

    def test_create_accepts_date_values(self):
        task = self.service.create_task({
            'name': 'A', 'startDate': date(2025, 11, 20), 'endDate': date(2025, 11, 21),
        })

        self.assertEqual(task.start_date, datetime(2025, 11, 20, tzinfo=dt_timezone.utc))
        self.assertTrue(task.is_overdue)

    def test_create_ignores_client_supplied_id_and_overdue_flag(self):
        task = self.service.create_task({
            'id': 99, 'isOverdue': True,
            'name': 'A', 'startDate': '2025-11-27', 'endDate': '2025-11-30',
        })

        self.assertEqual(task.id, 1)
        self.assertFalse(task.is_overdue)

    def test_progress_outside_range_is_accepted(self):
        """Progress is not clamped server-side."""
        task = self.service.create_task({
            'name': 'A', 'startDate': '2025-11-20', 'endDate': '2025-11-30', 'progress': 150,
        })

        self.assertEqual(task.progress, 150)

    def test_progress_numeric_string_is_rejected(self):
        """Progress must be a JSON integer, not a string that looks like one."""
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({
                'name': 'A', 'startDate': '2025-11-20', 'endDate': '2025-11-30', 'progress': '50',
            })

        self.assertEqual(ctx.exception.field, 'progress')
        self.assertEqual(self.store.count(), 0)

    def test_progress_boolean_is_rejected(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.create_task({
                'name': 'A', 'startDate': '2025-11-20', 'endDate': '2025-11-30', 'progress': True,
            })

        self.assertEqual(ctx.exception.field, 'progress')

    def test_update_missing_task_raises_not_found(self):
        existing = self.store.create(task_fields())

        with self.assertRaises(TaskNotFound):
            self.service.update_task(existing.id + 1, {'progress': 50})

        self.assertEqual(self.store.count(), 1)
        self.assertEqual(existing.progress, 0)

    def test_update_validates_before_lookup(self):
        with self.assertRaises(TaskValidationError) as ctx:
            self.service.update_task(42, {'progress': 'lots'})

        self.assertEqual(ctx.exception.field, 'progress')

    def test_partial_update_preserves_other_fields(self):
        task = self.service.create_task({
            'name': 'T', 'assignee': 'Bob',
            'startDate': '2025-11-20', 'endDate': '2025-11-30',
        })

        self.service.update_task(task.id, {'progress': 40})
        fetched = self.service.get_task(task.id)

        self.assertEqual(fetched.progress, 40)
        self.assertEqual(fetched.name, 'T')
        self.assertEqual(fetched.assignee, 'Bob')
        self.assertEqual(fetched.start_date, datetime(2025, 11, 20, tzinfo=dt_timezone.utc))
        self.assertEqual(fetched.end_date, datetime(2025, 11, 30, tzinfo=dt_timezone.utc))

    def test_marking_done_clears_overdue(self):
        """An overdue in-progress task stops being overdue once done, dates unchanged."""
        task = self.service.create_task({
            'name': 'A', 'startDate': NOW - 2 * DAY, 'endDate': NOW - DAY, 'status': 'in-progress',
        })
        self.assertTrue(self.service.list_tasks()[0].is_overdue)

        self.service.update_task(task.id, {'status': 'done'})
        listed = self.service.list_tasks()[0]

        self.assertFalse(listed.is_overdue)
        self.assertEqual(listed.end_date, NOW - DAY)

    def test_delete_missing_task_is_noop(self):
        self.service.delete_task(42)

        self.assertEqual(self.store.count(), 0)

    def test_delete_removes_task(self):
        task = self.store.create(task_fields())

        self.service.delete_task(task.id)

        self.assertIsNone(self.store.get(task.id))


class OverdueCheckTests(TestCase):
    """Tests for the on-demand overdue check."""

    def setUp(self):
        self.store = InMemoryTaskStore()

    def make_service(self, notifier=None):
        return TaskService(self.store, notifier=notifier, now=lambda: NOW)

    def test_no_overdue_tasks(self):
        self.store.create(task_fields())
        notifier = RecordingNotifier()

        result = self.make_service(notifier).check_overdue()

        self.assertEqual(result.as_dict(), {'count': 0, 'message': NO_OVERDUE_MESSAGE})
        self.assertEqual(result.outcome, OverdueCheckOutcome.NO_OVERDUE)
        self.assertEqual(notifier.sent, [])

    def test_skipped_without_provider(self):
        self.store.create(task_fields(end_date=NOW - DAY))

        result = self.make_service().check_overdue()

        self.assertEqual(result.count, 1)
        self.assertEqual(result.outcome, OverdueCheckOutcome.SKIPPED_NO_PROVIDER)
        self.assertIn('not configured', result.message)

    def test_sends_one_summary_for_all_overdue_tasks(self):
        self.store.create(task_fields(name='Late 1', end_date=NOW - DAY))
        self.store.create(task_fields(name='Late 2', end_date=NOW - 3 * DAY))
        self.store.create(task_fields(name='Done', end_date=NOW - DAY, status=TaskStatus.DONE))
        notifier = RecordingNotifier()

        result = self.make_service(notifier).check_overdue()

        self.assertEqual(result.count, 2)
        self.assertEqual(result.outcome, OverdueCheckOutcome.NOTIFIED)
        self.assertEqual(len(notifier.sent), 1)
        self.assertEqual({t.name for t in notifier.sent[0]}, {'Late 1', 'Late 2'})
        self.assertIn('pm@example.com', result.message)

    def test_provider_failure_is_reported_not_raised(self):
        self.store.create(task_fields(end_date=NOW - DAY))
        notifier = RecordingNotifier(error=smtplib.SMTPAuthenticationError(535, b'bad key'))

        result = self.make_service(notifier).check_overdue()

        self.assertEqual(result.count, 1)
        self.assertEqual(result.outcome, OverdueCheckOutcome.NOTIFY_FAILED)
        self.assertIn('failed', result.message)

    def test_repeated_checks_resend(self):
        self.store.create(task_fields(end_date=NOW - DAY))
        notifier = RecordingNotifier()
        service = self.make_service(notifier)

        service.check_overdue()
        service.check_overdue()

        self.assertEqual(len(notifier.sent), 2)

    def test_summary_lists_name_and_due_date(self):
        task = Task(name='Legacy Migration', start_date=NOW - 3 * DAY, end_date=NOW - DAY, assignee='Dave')

        subject, body = format_overdue_summary([task])

        self.assertIn('1 overdue', subject)
        self.assertIn('Legacy Migration (due: 2025-11-25)', body)
        self.assertIn('Dave', body)

    @override_settings(TASKS_NOTIFICATIONS={'api_key': '', 'recipients': ['pm@example.com']})
    def test_build_notifier_without_credential(self):
        self.assertIsNone(build_notifier())

    @override_settings(TASKS_NOTIFICATIONS={'api_key': 'secret', 'recipients': []})
    def test_build_notifier_without_recipients(self):
        self.assertIsNone(build_notifier())

    @override_settings(TASKS_NOTIFICATIONS={
        'api_key': 'secret', 'recipients': ['pm@example.com'], 'from_email': 'tasks@example.com',
    })
    def test_build_notifier_configured(self):
        notifier = build_notifier()

        self.assertIsInstance(notifier, EmailOverdueNotifier)
        self.assertEqual(notifier.recipients, ['pm@example.com'])
        self.assertEqual(notifier.from_email, 'tasks@example.com')


class FirstErrorTests(TestCase):
    def test_field_error(self):
        self.assertEqual(
            first_error({'name': ['This field is required.'], 'status': ['Bad.']}),
            ('name', 'This field is required.'),
        )

    def test_non_field_error(self):
        self.assertEqual(first_error({'non_field_errors': ['Invalid data.']}), ('', 'Invalid data.'))

    def test_nested_error(self):
        self.assertEqual(first_error({'meta': {'owner': ['Required.']}}), ('meta.owner', 'Required.'))


class TaskStoreTests(TestCase):
    """Tests for the ORM-backed store."""

    def setUp(self):
        self.store = TaskStore()

    def test_list_ordered_by_start_date(self):
        self.store.create(task_fields(name='Second', start_date=NOW))
        self.store.create(task_fields(name='First', start_date=NOW - 5 * DAY))

        self.assertEqual([t.name for t in self.store.list()], ['First', 'Second'])

    def test_queries_return_lists(self):
        self.store.create(task_fields(end_date=NOW - DAY))

        self.assertIsInstance(self.store.list(), list)
        self.assertIsInstance(self.store.list_overdue(NOW), list)

    def test_get_and_update_missing_return_none(self):
        self.assertIsNone(self.store.get(1))
        self.assertIsNone(self.store.update(1, {'progress': 10}))

    def test_update_merges_fields(self):
        task = self.store.create(task_fields(description='Keep me'))

        self.store.update(task.id, {'progress': 70, 'status': TaskStatus.IN_PROGRESS})
        stored = Task.objects.get(pk=task.id)

        self.assertEqual(stored.progress, 70)
        self.assertEqual(stored.status, TaskStatus.IN_PROGRESS)
        self.assertEqual(stored.description, 'Keep me')

    def test_delete_is_idempotent(self):
        task = self.store.create(task_fields())

        self.assertTrue(self.store.delete(task.id))
        self.assertFalse(self.store.delete(task.id))
        self.assertEqual(self.store.count(), 0)

    def test_list_overdue(self):
        self.store.create(task_fields(name='Late', end_date=NOW - DAY, status=TaskStatus.IN_PROGRESS))
        self.store.create(task_fields(name='Done', end_date=NOW - DAY, status=TaskStatus.DONE))
        self.store.create(task_fields(name='Future', end_date=NOW + DAY))

        self.assertEqual([t.name for t in self.store.list_overdue(NOW)], ['Late'])


class SeedingTests(TestCase):
    """Tests for the demo data bootstrap."""

    def test_seeds_empty_store(self):
        store = TaskStore()

        created = seed_demo_tasks(store, now=NOW)

        self.assertEqual(created, 4)
        self.assertEqual(
            {t.status for t in store.list()},
            {'done', 'in-progress', 'todo'},
        )
        self.assertEqual([t.name for t in store.list_overdue(NOW)], ['Legacy Migration'])

    def test_second_run_is_noop(self):
        store = TaskStore()
        seed_demo_tasks(store, now=NOW)

        self.assertEqual(seed_demo_tasks(store, now=NOW), 0)
        self.assertEqual(store.count(), 4)

    def test_does_not_seed_when_tasks_exist(self):
        store = InMemoryTaskStore()
        store.create(task_fields())

        self.assertEqual(seed_demo_tasks(store, now=NOW), 0)
        self.assertEqual(store.count(), 1)

    def test_failed_insert_leaves_store_empty(self):
        """The emptiness check and the inserts are one transaction."""
        store = FailingTaskStore(fail_after=2)

        with self.assertRaises(RuntimeError):
            seed_demo_tasks(store, now=NOW)

        self.assertEqual(Task.objects.count(), 0)
        self.assertEqual(seed_demo_tasks(TaskStore(), now=NOW), 4)

    def test_management_command(self):
        call_command('seed_tasks', verbosity=0)

        self.assertEqual(Task.objects.count(), 4)


@override_settings(TASKS_NOTIFICATIONS={'api_key': '', 'recipients': [], 'from_email': 'tasks@example.com'})
class APIEndpointTests(APITestCase):
    """Tests for the API endpoints."""

    def setUp(self):
        self.now = timezone.now()

    def create_task(self, **overrides):
        fields = {'start_date': self.now - 2 * DAY, 'end_date': self.now + 2 * DAY}
        fields.update(overrides)
        return Task.objects.create(**task_fields(**fields))

    def test_list_recomputes_overdue(self):
        """GET /api/tasks returns tasks by start date with isOverdue derived at read time."""
        self.create_task(name='Late', start_date=self.now - 5 * DAY, end_date=self.now - DAY, is_overdue=False)
        self.create_task(name='Fine', is_overdue=True)

        response = self.client.get('/api/tasks')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t['name'] for t in response.data], ['Late', 'Fine'])
        self.assertEqual([t['isOverdue'] for t in response.data], [True, False])

    def test_create_task(self):
        data = {
            'name': 'Design Phase',
            'startDate': '2030-01-10T09:00:00Z',
            'endDate': '2030-01-15',
            'status': 'in-progress',
            'progress': 30,
            'assignee': 'Bob',
        }

        response = self.client.post('/api/tasks', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Design Phase')
        self.assertEqual(response.data['segment'], 'General')
        self.assertEqual(response.data['startDate'], '2030-01-10T09:00:00Z')
        self.assertFalse(response.data['isOverdue'])
        self.assertTrue(Task.objects.filter(pk=response.data['id']).exists())

    def test_create_missing_name(self):
        data = {'startDate': '2030-01-10', 'endDate': '2030-01-15'}

        response = self.client.post('/api/tasks', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'name')
        self.assertIn('message', response.data)
        self.assertEqual(Task.objects.count(), 0)

    def test_get_task(self):
        task = self.create_task()

        response = self.client.get(f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], task.id)

    def test_get_missing_task(self):
        response = self.client.get('/api/tasks/999')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'message': 'Task not found'})

    def test_update_missing_task(self):
        response = self.client.put('/api/tasks/999', {'progress': 10}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Task.objects.count(), 0)

    def test_update_invalid_field(self):
        task = self.create_task()

        response = self.client.put(f'/api/tasks/{task.id}', {'status': 'later'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'status')
        self.assertEqual(Task.objects.get(pk=task.id).status, TaskStatus.TODO)

    def test_partial_update_preserves_fields(self):
        task = self.create_task(name='Keep', assignee='Carol')
        before = self.client.get(f'/api/tasks/{task.id}').data

        response = self.client.put(f'/api/tasks/{task.id}', {'progress': 55}, format='json')
        after = self.client.get(f'/api/tasks/{task.id}').data

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(after['progress'], 55)
        for field in ('name', 'assignee', 'startDate', 'endDate', 'segment', 'status'):
            self.assertEqual(after[field], before[field])

    def test_patch_is_accepted(self):
        task = self.create_task()

        response = self.client.patch(f'/api/tasks/{task.id}', {'segment': 'Phase 2'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['segment'], 'Phase 2')

    def test_overdue_then_done(self):
        data = {
            'name': 'A',
            'startDate': (self.now - 2 * DAY).isoformat(),
            'endDate': (self.now - DAY).isoformat(),
            'status': 'in-progress',
        }
        task_id = self.client.post('/api/tasks', data, format='json').data['id']

        self.assertTrue(self.client.get('/api/tasks').data[0]['isOverdue'])

        self.client.put(f'/api/tasks/{task_id}', {'status': 'done'}, format='json')
        listed = self.client.get('/api/tasks').data[0]

        self.assertFalse(listed['isOverdue'])
        self.assertEqual(listed['endDate'], self.client.get(f'/api/tasks/{task_id}').data['endDate'])

    def test_delete_task(self):
        task = self.create_task()

        response = self.client.delete(f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Task.objects.filter(pk=task.id).exists())

    def test_delete_missing_task(self):
        response = self.client.delete('/api/tasks/999')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_trailing_slash_accepted(self):
        response = self.client.get('/api/tasks/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_check_overdue_none(self):
        self.create_task()

        response = self.client.post('/api/tasks/check-overdue')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'count': 0, 'message': 'No overdue tasks found.'})

    def test_check_overdue_without_provider(self):
        self.create_task(end_date=self.now - DAY)

        response = self.client.post('/api/tasks/check-overdue')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertIn('not configured', response.data['message'])
        self.assertEqual(len(mail.outbox), 0)

    def test_check_overdue_sends_email(self):
        self.create_task(name='Legacy Migration', end_date=self.now - DAY)
        self.create_task(name='Old Report', end_date=self.now - 3 * DAY)

        with self.settings(TASKS_NOTIFICATIONS={
            'api_key': 'secret', 'recipients': ['pm@example.com'], 'from_email': 'tasks@example.com',
        }):
            response = self.client.post('/api/tasks/check-overdue')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['pm@example.com'])
        self.assertIn('Legacy Migration', mail.outbox[0].body)
        self.assertIn('Old Report', mail.outbox[0].body)

    def test_create_rejects_string_progress(self):
        data = {'name': 'A', 'startDate': '2030-01-10', 'endDate': '2030-01-15', 'progress': '50'}

        response = self.client.post('/api/tasks', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'progress')
        self.assertEqual(Task.objects.count(), 0)

    def test_check_overdue_provider_failure(self):
        """A failing email provider is reported in a 200 response, not raised."""
        self.create_task(name='Legacy Migration', end_date=self.now - DAY)

        with self.settings(TASKS_NOTIFICATIONS={
            'api_key': 'secret', 'recipients': ['pm@example.com'], 'from_email': 'tasks@example.com',
        }), mock.patch.object(
            EmailOverdueNotifier, 'send_overdue_summary',
            side_effect=ConnectionRefusedError(111, 'Connection refused'),
        ):
            response = self.client.post('/api/tasks/check-overdue')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertIn('failed to send', response.data['message'])
        self.assertIn('Connection refused', response.data['message'])
        self.assertEqual(len(mail.outbox), 0)

    def test_health_endpoint(self):
        """GET /api/health should return ok status."""
        response = self.client.get('/api/health')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'ok')
