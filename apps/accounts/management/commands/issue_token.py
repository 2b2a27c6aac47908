"""
Management command to mint a bearer token for API clients.

Usage:
    python manage.py issue_token --subject mobile-app
    python manage.py issue_token --subject ops --hours 720
"""
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.accounts.backends import issue_token


class Command(BaseCommand):
    help = 'Issue a signed JWT accepted by the /api/ endpoints'

    def add_arguments(self, parser):
        parser.add_argument(
            '--subject',
            default='api-client',
            help='Client identifier stored in the token (default: api-client)',
        )
        parser.add_argument(
            '--hours',
            type=int,
            default=settings.JWT_EXPIRY_HOURS,
            help='Token lifetime in hours',
        )

    def handle(self, *args, **options):
        token = issue_token(options['subject'], expires_in=timedelta(hours=options['hours']))
        self.stdout.write(token)
