"""
WSGI entry point.

Demo data is not seeded here: every worker process imports this module.
Run 'manage.py seed_tasks' once after 'manage.py migrate' instead.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
