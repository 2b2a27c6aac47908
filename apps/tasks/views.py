"""
Views for tasks app.

JSON endpoints, all behind a bearer token:
- POST   /api/tasks                 create task
- GET    /api/gettasks              filtered, paginated task list
- PUT    /api/tasks/<id>            update task
- DELETE /api/tasks/<id>            soft-delete task (cascades to subtasks)
- POST   /api/subtasks              create subtask
- GET    /api/getsubtasks           paginated subtask list
- PUT    /api/subtasks/<id>         update subtask status
- DELETE /api/subtasks/<id>         soft-delete subtask

Errors raised here (ValidationError, Http404) are turned into JSON
responses by apps.accounts.middleware.ApiExceptionMiddleware.
"""

from django.core.exceptions import ValidationError
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from apps.accounts.backends import token_required
from apps.accounts.middleware import read_json_body, get_request_params
from .filters import TaskFilter, SubTaskFilter
from .forms import TaskCreateForm, TaskUpdateForm, SubTaskStatusForm
from .models import Task, SubTask
from .serializers import task_to_dict, subtask_to_dict
from .services import (
    create_task, update_task, delete_task,
    create_subtask, update_subtask, delete_subtask,
    paginate
)


def _validated(form):
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form.cleaned_data


def _get_live_task(task_id):
    try:
        return Task.objects.alive().get(pk=task_id)
    except Task.DoesNotExist:
        raise Http404('Task not found')


def _get_live_subtask(subtask_id):
    try:
        return SubTask.objects.alive().select_related('task').get(pk=subtask_id)
    except SubTask.DoesNotExist:
        raise Http404('Subtask not found')


# =============================================================================
# Task Views
# =============================================================================

@csrf_exempt
@require_POST
@token_required
def task_create(request):
    """
    Create a task. Priority is computed from due_date, status starts as TODO.

    Body: {"title": ..., "description": ..., "due_date": ISO-8601, "user_id": optional}
    """
    data = _validated(TaskCreateForm(data=read_json_body(request)))

    task = create_task(
        title=data['title'],
        description=data['description'],
        due_date=data['due_date'],
        user=data['user_id'],
    )

    return JsonResponse(
        {'message': f'The task {task.title} created successfully', 'task': task_to_dict(task)},
        status=201
    )


@csrf_exempt
@require_GET
@token_required
def task_list(request):
    """
    Filtered task list ordered by due date (earliest first).

    Params: priority, due_date, status, deleted, page, page_size
    """
    params = get_request_params(request)

    task_filter = TaskFilter(params, queryset=Task.objects.all())
    if not task_filter.is_valid():
        raise ValidationError(task_filter.errors.as_data())

    queryset = task_filter.qs.order_by('due_date', 'id')
    tasks, page, page_size = paginate(queryset, params.get('page'), params.get('page_size'))

    return JsonResponse({
        'message': 'Here are the filtered tasks' if tasks else 'No task found',
        'tasks': [task_to_dict(task) for task in tasks],
        'page': page,
        'page_size': page_size,
    })


@csrf_exempt
@require_http_methods(['PUT', 'DELETE'])
@token_required
def task_detail(request, task_id):
    """Update (PUT) or soft-delete (DELETE) a task."""
    task = _get_live_task(task_id)

    if request.method == 'DELETE':
        delete_task(task)
        return JsonResponse({'message': 'Task Deleted Successfully'})

    form = TaskUpdateForm(data=read_json_body(request))
    _validated(form)
    task = update_task(task, **form.changed_values())

    return JsonResponse({'message': 'Task Updated Successfully', 'task': task_to_dict(task)})


# =============================================================================
# SubTask Views
# =============================================================================

@csrf_exempt
@require_POST
@token_required
def subtask_create(request):
    """
    Create an incomplete subtask.

    Body: {"task_id": <id>}; 404 if the task does not exist.
    """
    task_id = read_json_body(request).get('task_id')
    if task_id in (None, ''):
        raise ValidationError({'task_id': ['Task id is required.']})

    try:
        task_id = int(task_id)
    except (TypeError, ValueError):
        raise ValidationError({'task_id': ['Task id must be an integer.']})

    subtask = create_subtask(_get_live_task(task_id))

    return JsonResponse(
        {'message': 'The subtask created successfully', 'subtask': subtask_to_dict(subtask)},
        status=201
    )


@csrf_exempt
@require_GET
@token_required
def subtask_list(request):
    """
    Paginated subtask list, optionally restricted to one task.

    Params: task_id, deleted, page, page_size
    """
    params = get_request_params(request)

    subtask_filter = SubTaskFilter(params, queryset=SubTask.objects.all())
    if not subtask_filter.is_valid():
        raise ValidationError(subtask_filter.errors.as_data())

    subtasks, page, page_size = paginate(
        subtask_filter.qs.order_by('created_at', 'id'),
        params.get('page'),
        params.get('page_size'),
    )

    return JsonResponse({
        'message': 'Here are the filtered subtasks' if subtasks else 'No subtask found',
        'subtasks': [subtask_to_dict(subtask) for subtask in subtasks],
        'page': page,
        'page_size': page_size,
    })


@csrf_exempt
@require_http_methods(['PUT', 'DELETE'])
@token_required
def subtask_detail(request, subtask_id):
    """Update the completion flag (PUT) or soft-delete (DELETE) a subtask."""
    subtask = _get_live_subtask(subtask_id)

    if request.method == 'DELETE':
        delete_subtask(subtask)
        return JsonResponse({'message': 'SubTask Deleted Successfully'})

    data = _validated(SubTaskStatusForm(data=read_json_body(request)))
    subtask = update_subtask(subtask, data['status'])

    return JsonResponse({'message': 'Subtask Updated Successfully', 'subtask': subtask_to_dict(subtask)})
