"""
URL configuration for task_escalator project.
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API
    path('api/', include('apps.accounts.urls', namespace='accounts')),
    path('api/', include('apps.tasks.urls', namespace='tasks')),
]

# Admin site customization
admin.site.site_header = 'Task Escalator Administration'
admin.site.site_title = 'Task Escalator Admin'
admin.site.index_title = 'Welcome to Task Escalator Admin'
