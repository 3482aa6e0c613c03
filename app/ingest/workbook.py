"""
Workbook -> table transform for the PMS daily data workbook.

The workbook carries one sheet per domain (see ingest.schema). Each sheet's
first row is its header row; every following row with a governing date
becomes one record. Loading a workbook replaces the full contents of the
four tables.
"""

import logging
import os

import openpyxl
from django.db import transaction

from ingest.schema import DOMAINS, FieldValueError

logger = logging.getLogger(__name__)


class WorkbookDataError(ValueError):
    """A sheet cell could not be converted to its field's type."""

    def __init__(self, sheet, row_number, error):
        self.sheet = sheet
        self.row_number = row_number
        self.field = error.field
        super().__init__(f"{sheet} row {row_number}, {error}")


def open_workbook(path):
    """Open a workbook for reading cell values (formulas resolved to cached values)."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    return openpyxl.load_workbook(path, read_only=True, data_only=True)


def dedupe_headers(headers):
    """
    Make header names unique.
    Repeats get a __1, __2, ... suffix in order of appearance, so the three
    'Present' columns of the employability sheet read as Present, Present__1, Present__2.
    """
    seen = {}
    unique = []
    for header in headers:
        if header is None:
            unique.append(None)
            continue
        name = str(header).strip()
        count = seen.get(name, 0)
        seen[name] = count + 1
        unique.append(name if count == 0 else f'{name}__{count}')
    return unique


def iter_sheet_rows(worksheet):
    """
    Yield (row_number, {header: value}) for each data row of a sheet.
    Row numbers are the 1-based sheet rows; columns without a header are dropped.
    """
    rows = worksheet.iter_rows(values_only=True)
    header_row = next(rows, None)
    if header_row is None:
        return
    headers = dedupe_headers(header_row)

    for row_number, values in enumerate(rows, start=2):
        yield row_number, {
            header: value
            for header, value in zip(headers, values)
            if header is not None
        }


def transform_sheet(workbook, domain):
    """
    Convert one domain's sheet into a list of field dicts, in source row order.
    A missing sheet gives no rows.
    """
    if domain.sheet not in workbook.sheetnames:
        logger.warning('Sheet %r not found; no %s rows imported', domain.sheet, domain.label)
        return []

    records = []
    for row_number, row in iter_sheet_rows(workbook[domain.sheet]):
        try:
            values = domain.from_sheet_row(row)
        except FieldValueError as e:
            raise WorkbookDataError(domain.sheet, row_number, e) from e
        if values is not None:
            records.append(values)
    return records


def replace_all(workbook):
    """
    Replace the four dashboard tables with the workbook's rows.

    Runs as one transaction: if any sheet fails to convert or insert, the
    previous contents stay in place. Returns {domain key: rows inserted}.
    """
    counts = {}
    with transaction.atomic():
        for domain in DOMAINS:
            deleted, _ = domain.model.objects.all().delete()
            logger.info('Cleared %s existing %s rows', deleted, domain.label)

        for domain in DOMAINS:
            records = transform_sheet(workbook, domain)
            domain.model.objects.bulk_create(
                [domain.model(**values) for values in records],
                batch_size=500,
            )
            counts[domain.key] = len(records)
            logger.info('Imported %s %s rows from %r', len(records), domain.label, domain.sheet)
    return counts


def import_workbook(path):
    """Open `path` and replace the dashboard tables with its contents."""
    workbook = open_workbook(path)
    try:
        return replace_all(workbook)
    finally:
        workbook.close()
