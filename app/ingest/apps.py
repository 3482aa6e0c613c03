from django.apps import AppConfig


class IngestConfig(AppConfig):
    name = 'ingest'
    verbose_name = 'Workbook ingestion'
