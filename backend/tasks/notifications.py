"""
Overdue task notifications.

The overdue check is triggered on demand. It looks up overdue tasks and,
when an email provider is configured, sends one summary message listing
every overdue task. The outcome is always reported back to the caller:

    idle -> checking -> no_overdue | skipped_no_provider | notified | notify_failed

A failed send is reported in the result message and is never retried.
There is no cooldown, so calling the check again re-sends the summary for
tasks that are still overdue.
"""

import enum
import logging
import smtplib
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.mail import get_connection, send_mail

logger = logging.getLogger(__name__)

NO_OVERDUE_MESSAGE = 'No overdue tasks found.'


class OverdueCheckOutcome(enum.Enum):
    NO_OVERDUE = 'no_overdue'
    SKIPPED_NO_PROVIDER = 'skipped_no_provider'
    NOTIFIED = 'notified'
    NOTIFY_FAILED = 'notify_failed'


@dataclass
class OverdueCheckResult:
    count: int
    message: str
    outcome: OverdueCheckOutcome

    def as_dict(self):
        return {'count': self.count, 'message': self.message}


def format_overdue_summary(tasks):
    """Build the (subject, body) pair for the summary email."""
    subject = f"{len(tasks)} overdue task(s)"
    lines = ['The following tasks are past their end date and not done:', '']
    for task in tasks:
        line = f"  - {task.name} (due: {task.end_date.date().isoformat()})"
        if task.assignee:
            line += f" assigned to {task.assignee}"
        lines.append(line)
    return subject, '\n'.join(lines) + '\n'


class EmailOverdueNotifier:
    """Sends the overdue summary through Django's mail framework."""

    def __init__(self, recipients, from_email=None, connection=None):
        self.recipients = list(recipients)
        self.from_email = from_email
        self.connection = connection

    def send_overdue_summary(self, tasks):
        subject, body = format_overdue_summary(tasks)
        send_mail(
            subject,
            body,
            self.from_email,
            self.recipients,
            fail_silently=False,
            connection=self.connection,
        )


def build_notifier() -> Optional[EmailOverdueNotifier]:
    """
    Create the notifier from settings.

    Returns None when the provider credential or the recipient list is
    missing. That is a supported mode: the check still runs and reports
    that the notification was skipped.
    """
    config = settings.TASKS_NOTIFICATIONS
    if not config.get('api_key') or not config.get('recipients'):
        return None
    connection = get_connection(password=config['api_key'], fail_silently=False)
    return EmailOverdueNotifier(
        recipients=config['recipients'],
        from_email=config.get('from_email'),
        connection=connection,
    )


def run_overdue_check(store, notifier, now) -> OverdueCheckResult:
    overdue = store.list_overdue(now)
    count = len(overdue)

    if count == 0:
        logger.info("Overdue check: no overdue tasks")
        return OverdueCheckResult(0, NO_OVERDUE_MESSAGE, OverdueCheckOutcome.NO_OVERDUE)

    logger.info("Found %d overdue tasks:", count)
    for task in overdue:
        logger.info("  - %s (due: %s)", task.name, task.end_date.isoformat())

    if notifier is None:
        return OverdueCheckResult(
            count,
            f"Found {count} overdue tasks. Notification skipped: "
            "email provider is not configured.",
            OverdueCheckOutcome.SKIPPED_NO_PROVIDER,
        )

    try:
        notifier.send_overdue_summary(overdue)
    except (smtplib.SMTPException, OSError) as e:
        logger.warning("Overdue notification failed: %s", e)
        return OverdueCheckResult(
            count,
            f"Found {count} overdue tasks, but the notification failed to send: {e}",
            OverdueCheckOutcome.NOTIFY_FAILED,
        )

    recipients = ', '.join(getattr(notifier, 'recipients', []))
    return OverdueCheckResult(
        count,
        f"Found {count} overdue tasks. Notification sent to {recipients}.",
        OverdueCheckOutcome.NOTIFIED,
    )
