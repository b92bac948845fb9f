import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .serializers import TaskSerializer
from .services import TaskNotFound, TaskValidationError, build_task_service

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = {'message': 'Task not found'}
INTERNAL_ERROR_BODY = {'message': 'Internal server error'}


def _validation_error_response(error):
    return Response(
        {'message': error.message, 'field': error.field},
        status=status.HTTP_400_BAD_REQUEST
    )


@api_view(['GET', 'POST'])
def task_collection(request):
    """
    List or create tasks.

    GET /api/tasks

    Response: array of tasks ordered by startDate, isOverdue recomputed.

    POST /api/tasks

    Request body:
    {
        "name": "Design Phase",
        "segment": "General",        // optional
        "startDate": "2025-11-26T09:00:00Z",
        "endDate": "2025-12-01",
        "progress": 30,              // optional, default 0
        "status": "in-progress",     // optional: todo, in-progress, done
        "description": "...",        // optional
        "assignee": "Bob"            // optional
    }

    Response: 201 with the created task, or 400 {"message", "field"}.
    """
    service = build_task_service()

    try:
        if request.method == 'GET':
            tasks = service.list_tasks()
            return Response(TaskSerializer(tasks, many=True).data, status=status.HTTP_200_OK)

        task = service.create_task(request.data)
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)

    except TaskValidationError as e:
        return _validation_error_response(e)
    except Exception:
        logger.exception("Unexpected error in %s /api/tasks", request.method)
        return Response(INTERNAL_ERROR_BODY, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def task_detail(request, task_id):
    """
    Read, partially update or delete a single task.

    GET    /api/tasks/<id>  -> 200 task, 404 if absent
    PUT    /api/tasks/<id>  -> 200 task, 400 on invalid fields, 404 if absent
    PATCH  /api/tasks/<id>  -> same as PUT; both accept any subset of fields
    DELETE /api/tasks/<id>  -> 204 whether or not the task existed
    """
    task_id = int(task_id)
    service = build_task_service()

    try:
        if request.method == 'GET':
            task = service.get_task(task_id)
            return Response(TaskSerializer(task).data, status=status.HTTP_200_OK)

        if request.method == 'DELETE':
            service.delete_task(task_id)
            return Response(status=status.HTTP_204_NO_CONTENT)

        task = service.update_task(task_id, request.data)
        return Response(TaskSerializer(task).data, status=status.HTTP_200_OK)

    except TaskNotFound:
        return Response(NOT_FOUND_BODY, status=status.HTTP_404_NOT_FOUND)
    except TaskValidationError as e:
        return _validation_error_response(e)
    except Exception:
        logger.exception("Unexpected error in %s /api/tasks/%s", request.method, task_id)
        return Response(INTERNAL_ERROR_BODY, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['POST'])
def check_overdue_view(request):
    """
    Look up overdue tasks and send a summary notification if configured.

    POST /api/tasks/check-overdue

    Response:
    {
        "count": 2,
        "message": "Found 2 overdue tasks. Notification skipped: ..."
    }

    Notification failures are reported in the message, never as an HTTP error.
    """
    try:
        result = build_task_service().check_overdue()
        return Response(result.as_dict(), status=status.HTTP_200_OK)
    except Exception:
        logger.exception("Unexpected error in overdue check")
        return Response(INTERNAL_ERROR_BODY, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
def health_check(request):
    """Simple health check endpoint."""
    return Response({'status': 'ok', 'service': 'task-scheduler'})
