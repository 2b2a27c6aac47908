"""
URL configuration for tasks app.

Paths have no trailing slash to match existing API clients.
"""

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    # Tasks
    path('tasks', views.task_create, name='task_create'),
    path('gettasks', views.task_list, name='task_list'),
    path('tasks/<int:task_id>', views.task_detail, name='task_detail'),

    # SubTasks
    path('subtasks', views.subtask_create, name='subtask_create'),
    path('getsubtasks', views.subtask_list, name='subtask_list'),
    path('subtasks/<int:subtask_id>', views.subtask_detail, name='subtask_detail'),
]
