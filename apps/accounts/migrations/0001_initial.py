import apps.accounts.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('phone_number', models.CharField(help_text='Number dialled for escalation calls (E.164, e.g. +14155550100)', max_length=20, validators=[apps.accounts.validators.validate_phone_number])),
                ('priority', models.PositiveSmallIntegerField(choices=[(0, 'First'), (1, 'Second'), (2, 'Third')], db_index=True, help_text='Call order for escalations, 0 is called first')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'ordering': ['priority', 'created_at'],
            },
        ),
    ]
