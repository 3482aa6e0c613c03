"""
Field table for the four dashboard domains.

Every recognized field is listed once with:
- the workbook header(s) it is read from (first header present wins)
- its kind (date / int / decimal / text)
- the value stored when the source leaves it blank

Workbook ingestion and the create endpoint both build rows through this
table, so defaulting is the same on both paths.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple, Tuple

from ingest.dates import to_date
from ingest.models import DeliveryEntry, EmployabilityEntry, QualityEntry, SalesPipelineEntry

DATE = 'date'
INT = 'int'
DECIMAL = 'decimal'
TEXT = 'text'

ZERO = Decimal('0')


class Column(NamedTuple):
    field: str
    headers: Tuple[str, ...]
    kind: str
    default: Any = None


class FieldValueError(ValueError):
    """A value could not be converted to its field's type."""

    def __init__(self, field, message):
        self.field = field
        super().__init__(f"{field}: {message}")


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _to_decimal(value):
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        number = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Not a number: {value!r}") from None
    if not number.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return number


def _to_int(value):
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    return int(round(_to_decimal(value)))


_CONVERTERS = {
    DATE: to_date,
    INT: _to_int,
    DECIMAL: _to_decimal,
    TEXT: lambda value: str(value).strip(),
}


def clean_value(column, value):
    """Convert one raw value for `column`, falling back to its default when blank."""
    if is_blank(value):
        return column.default
    return _CONVERTERS[column.kind](value)


class Domain:
    """One business area: its table, its workbook sheet and its field table."""

    def __init__(self, key, label, sheet, model, governing_field, columns):
        self.key = key
        self.label = label
        self.sheet = sheet
        self.model = model
        self.governing_field = governing_field
        self.columns = tuple(columns)
        self._by_field = {column.field: column for column in self.columns}

    def __repr__(self):
        return f"<Domain {self.key}>"

    @property
    def governing_column(self):
        return self._by_field[self.governing_field]

    def from_sheet_row(self, row):
        """
        Build field values from a header->value mapping.
        Returns None when the governing date cell is blank: such rows are not ingested.
        """
        if is_blank(_first_present(row, self.governing_column.headers)):
            return None
        return self._clean(lambda column: _first_present(row, column.headers))

    def from_payload(self, payload):
        """Build field values from a field->value mapping (API body); unknown keys are ignored."""
        return self._clean(lambda column: payload.get(column.field))

    def _clean(self, raw_value):
        values = {}
        for column in self.columns:
            try:
                values[column.field] = clean_value(column, raw_value(column))
            except (ValueError, OverflowError) as e:
                raise FieldValueError(column.field, e) from e
        return values


def _first_present(row, headers):
    for header in headers:
        value = row.get(header)
        if not is_blank(value):
            return value
    return None


SALES_PIPELINE = Domain(
    key='sales-pipeline',
    label='sales',
    sheet='Sales Pipeline-Database',
    model=SalesPipelineEntry,
    governing_field='enquiry_date',
    columns=[
        # The source sheet spells the header "Equiry Date".
        Column('enquiry_date', ('Equiry Date', 'Enquiry Date'), DATE),
        Column('lead', ('Lead',), TEXT),
        Column('lead_qualified_date', ('Lead Qualified Date',), DATE),
        Column('sales_order', ('Sales Order',), TEXT),
        Column('sales_order_date', ('Sales Order Date',), DATE),
        Column('sales_cycle', ('Sales Cycle',), INT),
        Column('invoice_date', ('Invoice Date',), DATE),
        Column('invoice_value', ('Invoice Value',), DECIMAL),
        Column('city', ('City',), TEXT),
        Column('state', ('State',), TEXT),
    ],
)


def _department_columns(prefix, suffix):
    # Admin, DL and IDL repeat the same four headers side by side.
    return [
        Column(f'{prefix}_present', (f'Present{suffix}',), INT, 0),
        Column(f'{prefix}_leave', (f'Leave{suffix}',), INT, 0),
        Column(f'{prefix}_separated', (f'Separated{suffix}',), INT, 0),
        Column(f'{prefix}_reason_attrition', (f'Reason for Attrition{suffix}',), TEXT),
    ]


EMPLOYABILITY = Domain(
    key='employability',
    label='employability',
    sheet='Employability-Database',
    model=EmployabilityEntry,
    governing_field='date',
    columns=[
        Column('date', ('Date',), DATE),
        *_department_columns('admin', ''),
        *_department_columns('dl', '__1'),
        *_department_columns('idl', '__2'),
        Column('total_days_to_recruit', ('Total Days to Recruit',), INT),
        Column('hr_ir_count', ('HR & IR',), INT, 0),
        Column('finance_account_count', ('Finance & Account',), INT, 0),
        Column('sales_marketing_count', ('Sales & Marketing',), INT, 0),
        Column('operations_count', ('Operations',), INT, 0),
        Column('it_count', ('IT',), INT, 0),
    ],
)

QUALITY = Domain(
    key='quality',
    label='quality',
    sheet='Quality-Database',
    model=QualityEntry,
    governing_field='date',
    columns=[
        Column('date', ('Date',), DATE),
        Column('product_produced', ('Product Produced',), INT, 0),
        Column('product_rejected', ('Product Rejected',), INT, 0),
        Column('reason_for_rejection', ('Reason for Rejction', 'Reason for Rejection'), TEXT),
        Column('product_shipped', ('Product Shipped',), INT, 0),
        Column('product_returned', ('Product Returned',), INT, 0),
        Column('product_remake', ('Product Remake',), INT, 0),
        Column('cost_of_remake', ('Cost of Remake',), DECIMAL, ZERO),
        Column('product_repaired', ('Product Repaired',), INT, 0),
        Column('cost_of_repair', ('Cost of Repair',), DECIMAL, ZERO),
    ],
)

DELIVERY = Domain(
    key='delivery',
    label='delivery',
    sheet='Delivery-Database',
    model=DeliveryEntry,
    governing_field='order_date',
    columns=[
        Column('order_date', ('Order Date',), DATE),
        Column('order_value', ('Order Value',), DECIMAL, ZERO),
        Column('estimated_ship_date', ('Estimated Ship Date',), DATE),
        Column('actual_ship_date', ('Actual Ship Date',), DATE),
        Column('lead_time', ('Lead Time',), INT, 0),
        Column('delayed', ('Delayed',), INT, 0),
        Column('delayed_order_value', ('Delayed Order Value',), DECIMAL, ZERO),
        Column('reason_for_delay', ('Reason for Delay',), TEXT),
    ],
)

# Import order: sales, employability, quality, delivery.
DOMAINS = (SALES_PIPELINE, EMPLOYABILITY, QUALITY, DELIVERY)
DOMAINS_BY_KEY = {domain.key: domain for domain in DOMAINS}
