# tasks/urls.py
from django.urls import re_path
from . import views

urlpatterns = [
    re_path(r'^tasks/?$', views.task_collection, name='task_collection'),
    re_path(r'^tasks/check-overdue/?$', views.check_overdue_view, name='check_overdue'),
    re_path(r'^tasks/(?P<task_id>[0-9]+)/?$', views.task_detail, name='task_detail'),
    re_path(r'^health/?$', views.health_check, name='health_check'),
]
