import datetime

from rest_framework import serializers
from rest_framework.settings import api_settings

from .models import Task


class TaskDateTimeField(serializers.DateTimeField):
    """DateTimeField that also accepts plain date values (midnight is assumed)."""

    def to_internal_value(self, value):
        if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
            value = datetime.datetime.combine(value, datetime.time.min)
        return super().to_internal_value(value)


class StrictIntegerField(serializers.IntegerField):
    """IntegerField that rejects strings and booleans instead of coercing them."""

    def to_internal_value(self, data):
        if isinstance(data, (str, bool)):
            self.fail('invalid')
        return super().to_internal_value(data)


class TaskSerializer(serializers.ModelSerializer):
    """
    Serializer for Task model.

    Fields are exposed in camelCase on the wire. isOverdue is output only:
    the service layer recomputes it before serialization.
    """
    startDate = TaskDateTimeField(source='start_date')
    endDate = TaskDateTimeField(source='end_date')
    progress = StrictIntegerField(required=False)
    isOverdue = serializers.BooleanField(source='is_overdue', read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'name', 'segment', 'startDate', 'endDate', 'progress',
            'status', 'description', 'assignee', 'isOverdue',
        ]
        read_only_fields = ['id']
        extra_kwargs = {
            'description': {'required': False, 'allow_null': True, 'allow_blank': True},
            'assignee': {'required': False, 'allow_null': True, 'allow_blank': True},
        }


def first_error(errors, path=()):
    """
    Return (field, message) for the first entry of a DRF errors structure.

    Nested fields are joined with dots. Errors not tied to a field report
    an empty field name.
    """
    if isinstance(errors, dict):
        for key, value in errors.items():
            if key == api_settings.NON_FIELD_ERRORS_KEY:
                return first_error(value, path)
            return first_error(value, path + (str(key),))
    elif isinstance(errors, list) and errors:
        return first_error(errors[0], path)
    return '.'.join(path), str(errors)
