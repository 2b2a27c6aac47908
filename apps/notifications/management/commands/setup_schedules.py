"""
Management command to set up Django-Q2 schedules for the escalation jobs.

This command creates/updates the scheduled tasks required for:
- Daily priority refresh (00:00)
- Hourly overdue task calls (top of every hour)

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
Existing schedules will be updated if their configuration changes.
"""
from django.core.management.base import BaseCommand
from django_q.models import Schedule


SCHEDULES = [
    {
        'name': 'Daily Priority Refresh',
        'func': 'apps.notifications.tasks.refresh_task_priorities',
        'cron': '0 0 * * *',  # midnight daily
        'summary': 'Runs daily at 00:00',
    },
    {
        'name': 'Overdue Task Calls',
        'func': 'apps.notifications.tasks.call_overdue_task_owners',
        'cron': '0 * * * *',  # top of every hour
        'summary': 'Runs every hour',
    },
]


class Command(BaseCommand):
    help = 'Set up Django-Q2 schedules for priority refresh and overdue calls'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        schedules_created = 0
        schedules_updated = 0

        for entry in SCHEDULES:
            _, created = Schedule.objects.update_or_create(
                name=entry['name'],
                defaults={
                    'func': entry['func'],
                    'schedule_type': Schedule.CRON,
                    'cron': entry['cron'],
                    'repeats': -1,  # Run forever
                }
            )
            if created:
                schedules_created += 1
                self.stdout.write(
                    self.style.SUCCESS(f'✓ Created schedule: {entry["name"]} ({entry["cron"]})')
                )
            else:
                schedules_updated += 1
                self.stdout.write(
                    self.style.WARNING(f'↻ Updated schedule: {entry["name"]} ({entry["cron"]})')
                )

        total = schedules_created + schedules_updated
        self.stdout.write('')
        self.stdout.write(
            self.style.SUCCESS(
                f'Done! {schedules_created} schedule(s) created, '
                f'{schedules_updated} schedule(s) updated. '
                f'Total: {total} schedules configured.'
            )
        )

        self.stdout.write('')
        self.stdout.write('Schedule Summary:')
        for entry in SCHEDULES:
            self.stdout.write(f'  • {entry["name"]:<24} → {entry["summary"]}')
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
