"""
Reporting queries for the dashboard.

Each query is a named, parameterless read over the current store contents.
Queries are grouped into reports (the summary, and one detail report per
domain); running a report gives {query name: result}.

Windows:
- current year: rows dated on or after 1 January of this year
- prior month: rows dated on or after the first day of last month

Rates are percentages. A per-row ratio with a zero (or missing) denominator
is null and drops out of the average; an aggregate with nothing to average
is reported as 0.
"""

from collections import Counter
from datetime import timedelta

from django.db.models import Avg, Case, CharField, Count, F, FloatField, Q, Sum, Value, When
from django.db.models.functions import Cast, TruncMonth
from django.db.models.lookups import GreaterThan
from django.utils import timezone

from ingest.models import DeliveryEntry, EmployabilityEntry, QualityEntry, SalesPipelineEntry

TREND_MONTHS = 12

LEAD_TIME_BUCKETS = (
    ('≤30 days', Q(lead_time__lte=30)),
    ('31-60 days', Q(lead_time__gt=30, lead_time__lte=60)),
    ('61-90 days', Q(lead_time__gt=60, lead_time__lte=90)),
    ('>90 days', Q(lead_time__gt=90)),
)


class ReportQuery:
    """A named, parameterless query; `run()` returns its result shape."""

    def __init__(self, name, compute):
        self.name = name
        self._compute = compute
        self.__doc__ = compute.__doc__

    def __repr__(self):
        return f"<ReportQuery {self.name}>"

    def run(self):
        return self._compute()


def report_query(name):
    def decorator(compute):
        return ReportQuery(name, compute)
    return decorator


def run_report(queries):
    return {query.name: query.run() for query in queries}


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------

def year_start(today=None):
    today = today or timezone.localdate()
    return today.replace(month=1, day=1)


def prior_month_start(today=None):
    today = today or timezone.localdate()
    last_of_prior = today.replace(day=1) - timedelta(days=1)
    return last_of_prior.replace(day=1)


def month_label(day):
    """'Jan-25' style label used by the dashboard charts."""
    return day.strftime('%b-%y')


def number(value):
    """Aggregate -> float, with null aggregates reported as 0."""
    return float(value) if value is not None else 0.0


def percent_of(numerator, denominator):
    """Per-row percentage numerator/denominator * 100; null where denominator <= 0."""
    return Case(
        When(
            GreaterThan(denominator, 0),
            then=Cast(numerator, FloatField()) * Value(100.0) / Cast(denominator, FloatField()),
        ),
        default=None,
        output_field=FloatField(),
    )


def share_where(condition):
    """Per-row 1.0/0.0 indicator, averaged to give the share of rows matching `condition`."""
    return Case(When(condition, then=Value(1.0)), default=Value(0.0), output_field=FloatField())


PRESENT = F('admin_present') + F('dl_present') + F('idl_present')
SEPARATED = F('admin_separated') + F('dl_separated') + F('idl_separated')
RETENTION_RATE = percent_of(PRESENT, PRESENT + SEPARATED)

REJECTION_RATE = percent_of(F('product_rejected'), F('product_produced'))
RETURN_RATE = percent_of(F('product_returned'), F('product_shipped'))
QUALITY_COST = F('cost_of_repair') + F('cost_of_remake')

ON_TIME_SHARE = share_where(Q(delayed=0))


def monthly(queryset, date_field):
    """Group rows by calendar month of `date_field`, most recent first."""
    return (
        queryset.filter(**{f'{date_field}__isnull': False})
        .annotate(period=TruncMonth(date_field))
        .values('period')
        .order_by('-period')
    )


def ranked(rows, key):
    return sorted(rows, key=lambda row: (-row['count'], str(row[key])))


# ------------------------------------------------------------
# Summary
# ------------------------------------------------------------

@report_query('sales_pipeline')
def sales_summary():
    """Year-to-date invoicing, cycle length and win rate."""
    agg = SalesPipelineEntry.objects.filter(invoice_date__gte=year_start()).aggregate(
        ytd_sales=Sum('invoice_value'),
        avg_sales_cycle=Avg('sales_cycle'),
        won_share=Avg(share_where(Q(sales_order='Won'))),
        avg_order_value=Avg('invoice_value'),
    )
    return {
        'ytd_sales': number(agg['ytd_sales']),
        'avg_sales_cycle': number(agg['avg_sales_cycle']),
        'conversion_rate': number(agg['won_share']) * 100,
        'avg_order_value': number(agg['avg_order_value']),
    }


@report_query('employability')
def employability_summary():
    agg = EmployabilityEntry.objects.filter(date__gte=prior_month_start()).aggregate(
        retention_rate=Avg(RETENTION_RATE),
        avg_recruitment_days=Avg('total_days_to_recruit'),
    )
    return {
        'retention_rate': number(agg['retention_rate']),
        'avg_recruitment_days': number(agg['avg_recruitment_days']),
    }


@report_query('quality')
def quality_summary():
    agg = QualityEntry.objects.filter(date__gte=prior_month_start()).aggregate(
        rejection_rate=Avg(REJECTION_RATE),
        return_rate=Avg(RETURN_RATE),
        total_quality_cost=Sum(QUALITY_COST),
    )
    return {
        'rejection_rate': number(agg['rejection_rate']),
        'return_rate': number(agg['return_rate']),
        'total_quality_cost': number(agg['total_quality_cost']),
    }


@report_query('delivery')
def delivery_summary():
    agg = DeliveryEntry.objects.filter(order_date__gte=prior_month_start()).aggregate(
        on_time_share=Avg(ON_TIME_SHARE),
        avg_lead_time=Avg('lead_time'),
        delayed_orders=Count('id', filter=Q(delayed=1)),
        delayed_order_value=Sum('delayed_order_value'),
    )
    return {
        'on_time_delivery': number(agg['on_time_share']) * 100,
        'avg_lead_time': number(agg['avg_lead_time']),
        'delayed_orders': agg['delayed_orders'],
        'delayed_order_value': number(agg['delayed_order_value']),
    }


# ------------------------------------------------------------
# Sales pipeline
# ------------------------------------------------------------

@report_query('monthly_trends')
def sales_monthly_trends():
    """Invoiced totals per month, last 12 invoiced months."""
    rows = monthly(SalesPipelineEntry.objects.all(), 'invoice_date').annotate(
        total_sales=Sum('invoice_value'),
        avg_cycle=Avg('sales_cycle'),
        total_orders=Count('id'),
    )[:TREND_MONTHS]
    return [
        {
            'month': month_label(row['period']),
            'total_sales': number(row['total_sales']),
            'avg_cycle': number(row['avg_cycle']),
            'total_orders': row['total_orders'],
        }
        for row in rows
    ]


@report_query('conversion_funnel')
def conversion_funnel():
    """
    Enquiries -> Leads -> Opportunities -> Won.
    Each stage is counted over the whole table, not within the previous stage.
    """
    entries = SalesPipelineEntry.objects.all()
    # Leads match "Yes" in any case on purpose; hand-typed sheets carry "yes" and "YES" too.
    stages = [
        ('Enquiries', entries),
        ('Leads', entries.filter(lead__iexact='Yes')),
        ('Opportunities', entries.filter(lead_qualified_date__isnull=False)),
        ('Won', entries.filter(sales_order='Won')),
    ]
    return [{'stage': stage, 'count': qs.count()} for stage, qs in stages]


@report_query('geographic_distribution')
def geographic_distribution():
    rows = (
        SalesPipelineEntry.objects.filter(invoice_value__isnull=False)
        .values('state')
        .annotate(total_value=Sum('invoice_value'), orders=Count('id'))
        .order_by('-total_value', 'state')
    )
    return [
        {'state': row['state'], 'total_value': number(row['total_value']), 'orders': row['orders']}
        for row in rows
    ]


# ------------------------------------------------------------
# Employability
# ------------------------------------------------------------

DEPARTMENTS = (('Admin', 'admin'), ('DL', 'dl'), ('IDL', 'idl'))


@report_query('department_headcount')
def department_headcount():
    aggregates = {}
    for _, prefix in DEPARTMENTS:
        aggregates[f'{prefix}_present'] = Avg(f'{prefix}_present')
        aggregates[f'{prefix}_separated'] = Avg(f'{prefix}_separated')
    agg = EmployabilityEntry.objects.aggregate(**aggregates)
    return [
        {
            'department': department,
            'present': number(agg[f'{prefix}_present']),
            'separated': number(agg[f'{prefix}_separated']),
        }
        for department, prefix in DEPARTMENTS
    ]


@report_query('attrition_reasons')
def attrition_reasons():
    """Attrition reasons pooled across the admin, DL and IDL columns."""
    counts = Counter()
    for _, prefix in DEPARTMENTS:
        field = f'{prefix}_reason_attrition'
        rows = (
            EmployabilityEntry.objects.filter(**{f'{field}__isnull': False})
            .values(field)
            .annotate(count=Count('id'))
            .order_by()
        )
        for row in rows:
            counts[row[field]] += row['count']
    return ranked([{'reason': reason, 'count': count} for reason, count in counts.items()], 'reason')


@report_query('retention_trends')
def retention_trends():
    rows = monthly(EmployabilityEntry.objects.all(), 'date').annotate(
        retention_rate=Avg(RETENTION_RATE),
    )[:TREND_MONTHS]
    return [
        {'month': month_label(row['period']), 'retention_rate': number(row['retention_rate'])}
        for row in rows
    ]


# ------------------------------------------------------------
# Quality
# ------------------------------------------------------------

@report_query('quality_trends')
def quality_trends():
    """Monthly rejection/return rates and rework cost; months with no production are left out."""
    rows = monthly(QualityEntry.objects.filter(product_produced__gt=0), 'date').annotate(
        rejection_rate=Avg(REJECTION_RATE),
        return_rate=Avg(RETURN_RATE),
        quality_costs=Sum(QUALITY_COST),
    )[:TREND_MONTHS]
    return [
        {
            'month': month_label(row['period']),
            'rejection_rate': number(row['rejection_rate']),
            'return_rate': number(row['return_rate']),
            'quality_costs': number(row['quality_costs']),
        }
        for row in rows
    ]


@report_query('rejection_reasons')
def rejection_reasons():
    rows = (
        QualityEntry.objects.filter(reason_for_rejection__isnull=False)
        .values('reason_for_rejection')
        .annotate(count=Count('id'))
        .order_by()
    )
    return ranked(
        [{'reason': row['reason_for_rejection'], 'count': row['count']} for row in rows],
        'reason',
    )


@report_query('cost_breakdown')
def cost_breakdown():
    agg = QualityEntry.objects.filter(date__gte=prior_month_start()).aggregate(
        repair_costs=Sum('cost_of_repair'),
        remake_costs=Sum('cost_of_remake'),
        return_incidents=Count('id', filter=Q(product_returned__gt=0)),
    )
    return {
        'repair_costs': number(agg['repair_costs']),
        'remake_costs': number(agg['remake_costs']),
        'return_incidents': agg['return_incidents'],
    }


# ------------------------------------------------------------
# Delivery
# ------------------------------------------------------------

@report_query('delivery_trends')
def delivery_trends():
    rows = monthly(DeliveryEntry.objects.all(), 'order_date').annotate(
        on_time_share=Avg(ON_TIME_SHARE),
        avg_lead_time=Avg('lead_time'),
        delayed_orders=Count('id', filter=Q(delayed=1)),
    )[:TREND_MONTHS]
    return [
        {
            'month': month_label(row['period']),
            'on_time_rate': number(row['on_time_share']) * 100,
            'avg_lead_time': number(row['avg_lead_time']),
            'delayed_orders': row['delayed_orders'],
        }
        for row in rows
    ]


@report_query('delay_reasons')
def delay_reasons():
    rows = (
        DeliveryEntry.objects.filter(reason_for_delay__isnull=False)
        .values('reason_for_delay')
        .annotate(count=Count('id'), value=Sum('delayed_order_value'))
        .order_by()
    )
    return ranked(
        [
            {'reason': row['reason_for_delay'], 'count': row['count'], 'value': number(row['value'])}
            for row in rows
        ],
        'reason',
    )


@report_query('lead_time_distribution')
def lead_time_distribution():
    """Order count per lead-time bucket; orders without a lead time are not bucketed."""
    bucket = Case(
        *[When(condition, then=Value(label)) for label, condition in LEAD_TIME_BUCKETS],
        output_field=CharField(),
    )
    rows = (
        DeliveryEntry.objects.filter(lead_time__isnull=False)
        .annotate(bucket=bucket)
        .values('bucket')
        .annotate(count=Count('id'))
        .order_by()
    )
    order = [label for label, _ in LEAD_TIME_BUCKETS]
    rows = sorted(rows, key=lambda row: (-row['count'], order.index(row['bucket'])))
    return [{'lead_time_bucket': row['bucket'], 'count': row['count']} for row in rows]


SUMMARY = (sales_summary, employability_summary, quality_summary, delivery_summary)

DOMAIN_REPORTS = {
    'sales-pipeline': (sales_monthly_trends, conversion_funnel, geographic_distribution),
    'employability': (department_headcount, attrition_reasons, retention_trends),
    'quality': (quality_trends, rejection_reasons, cost_breakdown),
    'delivery': (delivery_trends, delay_reasons, lead_time_distribution),
}
