import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('due_date', models.DateTimeField(db_index=True)),
                ('priority', models.PositiveSmallIntegerField(choices=[(0, 'Due today'), (1, 'Due in 1-2 days'), (2, 'Due in 3-4 days'), (3, 'Due later')], db_index=True, default=3, help_text='Recomputed from due_date on save and by the daily refresh job')),
                ('status', models.CharField(choices=[('TODO', 'To Do'), ('IN_PROGRESS', 'In Progress'), ('DONE', 'Done')], db_index=True, default='TODO', max_length=15)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('user', models.ForeignKey(blank=True, help_text='Escalation contact for this task', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='accounts.user')),
            ],
            options={
                'verbose_name': 'task',
                'verbose_name_plural': 'tasks',
                'ordering': ['due_date', 'id'],
                'indexes': [
                    models.Index(fields=['status', 'due_date'], name='tasks_task_status_2b8e52_idx'),
                    models.Index(fields=['priority', 'due_date'], name='tasks_task_priorit_5c1f0a_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SubTask',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.PositiveSmallIntegerField(choices=[(0, 'Incomplete'), (1, 'Complete')], default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('task', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='subtasks', to='tasks.task')),
            ],
            options={
                'verbose_name': 'subtask',
                'verbose_name_plural': 'subtasks',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['task', 'deleted_at'], name='tasks_subta_task_id_8d3e71_idx'),
                ],
            },
        ),
    ]
