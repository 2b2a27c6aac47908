"""
JSON representations of tasks models.

Datetimes are left as objects; JsonResponse's DjangoJSONEncoder renders
them as ISO-8601 strings.
"""


def task_to_dict(task):
    return {
        'id': task.pk,
        'title': task.title,
        'description': task.description,
        'due_date': task.due_date,
        'priority': int(task.priority),
        'status': str(task.status),
        'user_id': task.user_id,
        'created_at': task.created_at,
        'updated_at': task.updated_at,
        'deleted_at': task.deleted_at,
    }


def subtask_to_dict(subtask):
    return {
        'id': subtask.pk,
        'task_id': subtask.task_id,
        'status': int(subtask.status),
        'created_at': subtask.created_at,
        'updated_at': subtask.updated_at,
        'deleted_at': subtask.deleted_at,
    }
