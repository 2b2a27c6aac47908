from django.apps import AppConfig


class TasksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.tasks'
    label = 'tasks'
    verbose_name = 'Tasks'

    def ready(self):
        # `runserver` without an explicit port listens on settings.PORT
        from django.conf import settings
        from django.core.management.commands import runserver

        runserver.Command.default_port = str(settings.PORT)
