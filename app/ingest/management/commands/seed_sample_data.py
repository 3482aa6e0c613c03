from django.core.management.base import BaseCommand
from django.db import transaction

from ingest.models import SalesPipelineEntry
from ingest.schema import DELIVERY, EMPLOYABILITY, QUALITY, SALES_PIPELINE

SAMPLE_ROWS = {
    SALES_PIPELINE: [
        {'enquiry_date': '2025-01-27', 'lead': 'Yes', 'lead_qualified_date': '2025-03-13',
         'sales_order': 'Won', 'sales_order_date': '2025-05-12', 'sales_cycle': 105,
         'invoice_date': '2025-06-11', 'invoice_value': 500000, 'city': 'Ahmedabad', 'state': 'GJ'},
        {'enquiry_date': '2025-02-01', 'lead': 'Yes', 'lead_qualified_date': '2025-03-18',
         'sales_order': 'Won', 'sales_order_date': '2025-05-15', 'sales_cycle': 120,
         'invoice_date': '2025-07-01', 'invoice_value': 750000, 'city': 'Mumbai', 'state': 'MH'},
        {'enquiry_date': '2025-02-05', 'lead': 'Yes', 'lead_qualified_date': '2025-03-22',
         'sales_order': 'Won', 'sales_order_date': '2025-06-01', 'sales_cycle': 135,
         'invoice_date': '2025-08-01', 'invoice_value': 1500000, 'city': 'Delhi', 'state': 'DL'},
    ],
    EMPLOYABILITY: [
        {'date': '2025-01-23',
         'admin_present': 10, 'admin_leave': 1, 'admin_separated': 1,
         'admin_reason_attrition': 'Better Opportunity',
         'dl_present': 10, 'dl_leave': 1, 'dl_separated': 1,
         'dl_reason_attrition': 'Better Opportunity',
         'idl_present': 10, 'idl_leave': 1, 'idl_separated': 1,
         'idl_reason_attrition': 'Better Opportunity',
         'total_days_to_recruit': 60, 'hr_ir_count': 2, 'finance_account_count': 2,
         'sales_marketing_count': 4, 'operations_count': 8, 'it_count': 1},
        {'date': '2025-01-24',
         'admin_present': 11, 'dl_present': 11, 'idl_present': 11,
         'hr_ir_count': 2, 'finance_account_count': 2,
         'sales_marketing_count': 4, 'operations_count': 8, 'it_count': 1},
    ],
    QUALITY: [
        {'date': '2025-01-23', 'product_produced': 1200, 'product_rejected': 20,
         'reason_for_rejection': 'Specification', 'product_shipped': 1500, 'product_returned': 2,
         'product_remake': 1, 'cost_of_remake': 100000, 'product_repaired': 3, 'cost_of_repair': 75000},
        {'date': '2025-01-24', 'product_produced': 1000, 'product_rejected': 22,
         'product_shipped': 950, 'product_returned': 1,
         'product_repaired': 2, 'cost_of_repair': 25000},
    ],
    DELIVERY: [
        {'order_date': '2025-01-23', 'order_value': 500000, 'estimated_ship_date': '2025-02-23',
         'actual_ship_date': '2025-02-23', 'lead_time': 31, 'delayed': 0},
        {'order_date': '2025-01-24', 'order_value': 650000, 'estimated_ship_date': '2025-02-28',
         'actual_ship_date': '2025-03-01', 'lead_time': 35, 'delayed': 1,
         'delayed_order_value': 650000, 'reason_for_delay': 'No RM'},
    ],
}


class Command(BaseCommand):
    help = 'Insert a handful of sample rows into each dashboard table when the store is empty'

    def handle(self, *args, **options):
        if SalesPipelineEntry.objects.exists():
            self.stdout.write(self.style.WARNING('Sales pipeline already has rows; skipping sample data'))
            return

        with transaction.atomic():
            for domain, rows in SAMPLE_ROWS.items():
                for row in rows:
                    domain.model.objects.create(**domain.from_payload(row))
                self.stdout.write(f'  {domain.label}: {len(rows)} sample rows')

        self.stdout.write(self.style.SUCCESS('Sample data inserted'))
