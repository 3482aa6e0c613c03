import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from ingest.schema import DOMAINS
from ingest.workbook import import_workbook

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Replace the dashboard tables with the rows of a PMS daily data workbook'

    def add_arguments(self, parser):
        parser.add_argument('--file', type=str, default=None,
                            help='Workbook path (defaults to PMS_WORKBOOK_PATH)')

    def handle(self, *args, **options):
        file_path = options['file'] or settings.PMS_WORKBOOK_PATH
        if not file_path:
            raise CommandError('No workbook given: pass --file or set PMS_WORKBOOK_PATH')

        self.stdout.write(f'Reading {file_path}...')

        try:
            counts = import_workbook(file_path)
        except FileNotFoundError:
            logger.error('Workbook not found: %s', file_path)
            raise CommandError(f'File not found: {file_path}')
        except Exception as e:
            logger.exception('Error importing workbook %s', file_path)
            raise CommandError(f'Error importing workbook: {e}') from e

        for domain in DOMAINS:
            self.stdout.write(f'  {domain.sheet}: {counts[domain.key]} rows')

        self.stdout.write(self.style.SUCCESS(
            f'Imported {sum(counts.values())} rows from {file_path}'
        ))
