from datetime import date
from decimal import Decimal

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from ingest.models import DeliveryEntry, EmployabilityEntry, QualityEntry, SalesPipelineEntry
from reports.queries import lead_time_distribution
from tests.workbooks import DELIVERY_HEADERS, SALES_HEADERS


@pytest.mark.django_db
class TestWorkbookImport:
    """Test the workbook -> table replace."""

    def test_rows_without_governing_date_are_skipped(self, sample_workbook):
        """Each sheet has one undated row, which must not become a record."""
        call_command('import_workbook', file=sample_workbook)

        assert SalesPipelineEntry.objects.count() == 2
        assert EmployabilityEntry.objects.count() == 2
        assert QualityEntry.objects.count() == 2
        assert DeliveryEntry.objects.count() == 2

    def test_three_row_sales_sheet_one_undated(self, make_workbook):
        path = make_workbook({
            'Sales Pipeline-Database': [
                SALES_HEADERS,
                [45684, 'Yes', None, None, None, None, None, None, 'Pune', 'MH'],
                [None, 'Yes', None, None, None, None, None, None, 'Pune', 'MH'],
                [45690, 'No', None, None, None, None, None, None, 'Surat', 'GJ'],
            ],
        })

        call_command('import_workbook', file=path)

        assert SalesPipelineEntry.objects.count() == 2

    def test_reimport_replaces_rows(self, sample_workbook):
        """Importing the same workbook twice gives the same counts, not double."""
        call_command('import_workbook', file=sample_workbook)
        first = [m.objects.count() for m in (SalesPipelineEntry, EmployabilityEntry, QualityEntry, DeliveryEntry)]

        call_command('import_workbook', file=sample_workbook)
        second = [m.objects.count() for m in (SalesPipelineEntry, EmployabilityEntry, QualityEntry, DeliveryEntry)]

        assert first == second == [2, 2, 2, 2]

    def test_existing_rows_are_discarded(self, sample_workbook):
        DeliveryEntry.objects.create(order_date=date(2020, 1, 1), lead_time=5)

        call_command('import_workbook', file=sample_workbook)

        assert not DeliveryEntry.objects.filter(order_date=date(2020, 1, 1)).exists()

    def test_date_serials_decoded(self, sample_workbook):
        call_command('import_workbook', file=sample_workbook)

        won = SalesPipelineEntry.objects.get(sales_order='Won')
        assert won.enquiry_date == date(2025, 1, 27)
        assert won.lead_qualified_date == date(2025, 3, 13)
        assert won.invoice_value == Decimal('500000.00')
        assert won.sales_cycle == 105

    def test_blank_dates_and_text_stay_null(self, sample_workbook):
        call_command('import_workbook', file=sample_workbook)

        lost = SalesPipelineEntry.objects.get(sales_order='Lost')
        assert lost.lead_qualified_date is None
        assert lost.invoice_date is None
        assert lost.invoice_value is None
        assert lost.sales_cycle is None

    def test_blank_numbers_default_to_zero(self, sample_workbook):
        call_command('import_workbook', file=sample_workbook)

        headcount = EmployabilityEntry.objects.get(date=date(2025, 1, 24))
        assert headcount.admin_leave == 0
        assert headcount.idl_separated == 0
        assert headcount.it_count == 0
        assert headcount.admin_reason_attrition is None
        assert headcount.total_days_to_recruit is None

        quality = QualityEntry.objects.get(date=date(2025, 1, 24))
        assert quality.product_returned == 0
        assert quality.cost_of_repair == Decimal('0')
        assert quality.reason_for_rejection is None

    def test_repeated_headers_map_to_departments(self, sample_workbook):
        """The three Present/Leave/Separated blocks are admin, DL and IDL in that order."""
        call_command('import_workbook', file=sample_workbook)

        headcount = EmployabilityEntry.objects.get(date=date(2025, 1, 23))
        assert (headcount.admin_present, headcount.dl_present, headcount.idl_present) == (10, 20, 30)
        assert (headcount.admin_separated, headcount.dl_separated, headcount.idl_separated) == (1, 2, 3)
        assert headcount.dl_reason_attrition == 'Relocation'
        assert headcount.operations_count == 8

    def test_missing_sheet_imports_nothing_for_it(self, make_workbook):
        path = make_workbook({
            'Delivery-Database': [
                DELIVERY_HEADERS,
                [45680, 500000, None, None, 31, None, None, None],
            ],
        })

        call_command('import_workbook', file=path)

        assert SalesPipelineEntry.objects.count() == 0
        assert QualityEntry.objects.count() == 0
        delivery = DeliveryEntry.objects.get()
        assert delivery.delayed == 0
        assert delivery.delayed_order_value == Decimal('0')

    def test_missing_file_leaves_tables_alone(self, tmp_path):
        SalesPipelineEntry.objects.create(enquiry_date=date(2025, 1, 1))

        with pytest.raises(CommandError, match='File not found'):
            call_command('import_workbook', file=str(tmp_path / 'missing.xlsx'))

        assert SalesPipelineEntry.objects.count() == 1

    def test_bad_date_serial_aborts_and_keeps_previous_rows(self, make_workbook, sample_workbook):
        call_command('import_workbook', file=sample_workbook)
        bad = make_workbook({
            'Sales Pipeline-Database': [
                SALES_HEADERS,
                [45684, 'Yes', None, None, None, None, None, None, 'Pune', 'MH'],
                [45685, 'Yes', 'next week', None, None, None, None, None, 'Pune', 'MH'],
            ],
        }, name='bad.xlsx')

        with pytest.raises(CommandError, match='lead_qualified_date'):
            call_command('import_workbook', file=bad)

        assert SalesPipelineEntry.objects.count() == 2
        assert DeliveryEntry.objects.count() == 2

    def test_blank_lead_time_stored_as_zero_and_bucketed(self, make_workbook):
        path = make_workbook({
            'Delivery-Database': [
                DELIVERY_HEADERS,
                [45680, 500000, None, None, None, None, None, None],
            ],
        })

        call_command('import_workbook', file=path)

        assert DeliveryEntry.objects.get().lead_time == 0
        assert lead_time_distribution.run() == [{'lead_time_bucket': '≤30 days', 'count': 1}]

    def test_no_workbook_configured(self, settings):
        settings.PMS_WORKBOOK_PATH = ''

        with pytest.raises(CommandError, match='No workbook given'):
            call_command('import_workbook')

    def test_workbook_path_from_settings(self, settings, sample_workbook):
        settings.PMS_WORKBOOK_PATH = sample_workbook

        call_command('import_workbook')

        assert SalesPipelineEntry.objects.count() == 2


@pytest.mark.django_db
class TestSeedSampleData:

    def test_seeds_empty_store(self):
        call_command('seed_sample_data')

        assert SalesPipelineEntry.objects.count() == 3
        assert EmployabilityEntry.objects.count() == 2
        assert QualityEntry.objects.count() == 2
        assert DeliveryEntry.objects.count() == 2
        second_day = EmployabilityEntry.objects.get(date=date(2025, 1, 24))
        assert second_day.admin_separated == 0
        assert second_day.total_days_to_recruit is None

    def test_skips_when_sales_present(self):
        SalesPipelineEntry.objects.create(enquiry_date=date(2025, 1, 1))

        call_command('seed_sample_data')

        assert SalesPipelineEntry.objects.count() == 1
        assert DeliveryEntry.objects.count() == 0
