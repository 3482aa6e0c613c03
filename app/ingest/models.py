import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone


class Record(models.Model):
    """
    Base for the four dashboard tables.
    Rows are siloed per domain: no foreign keys, no uniqueness beyond the id.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def to_dict(self):
        """Flat field map of the stored row, as returned by the API. Decimals go out as floats, like the reports."""
        values = {}
        for field in self._meta.concrete_fields:
            value = getattr(self, field.attname)
            if isinstance(value, Decimal):
                value = float(value)
            values[field.attname] = value
        return values


class SalesPipelineEntry(Record):
    """One enquiry from the Sales Pipeline sheet, followed through to invoice."""
    enquiry_date = models.DateField(null=True, blank=True, db_index=True)
    lead = models.CharField(max_length=10, null=True, blank=True,
                            help_text="Yes/No flag")
    lead_qualified_date = models.DateField(null=True, blank=True)
    sales_order = models.CharField(max_length=20, null=True, blank=True,
                                   help_text="Order status, e.g. Won")
    sales_order_date = models.DateField(null=True, blank=True)
    sales_cycle = models.IntegerField(null=True, blank=True, help_text="Days")
    invoice_date = models.DateField(null=True, blank=True, db_index=True)
    invoice_value = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    city = models.CharField(max_length=100, null=True, blank=True)
    state = models.CharField(max_length=50, null=True, blank=True)

    class Meta(Record.Meta):
        db_table = 'sales_pipeline'

    def __str__(self):
        return f"Enquiry {self.enquiry_date} ({self.sales_order or 'open'})"


class EmployabilityEntry(Record):
    """Daily headcount for the admin, direct-labour and indirect-labour groups."""
    date = models.DateField(null=True, blank=True, db_index=True)

    admin_present = models.IntegerField(default=0)
    admin_leave = models.IntegerField(default=0)
    admin_separated = models.IntegerField(default=0)
    admin_reason_attrition = models.CharField(max_length=100, null=True, blank=True)

    dl_present = models.IntegerField(default=0)
    dl_leave = models.IntegerField(default=0)
    dl_separated = models.IntegerField(default=0)
    dl_reason_attrition = models.CharField(max_length=100, null=True, blank=True)

    idl_present = models.IntegerField(default=0)
    idl_leave = models.IntegerField(default=0)
    idl_separated = models.IntegerField(default=0)
    idl_reason_attrition = models.CharField(max_length=100, null=True, blank=True)

    total_days_to_recruit = models.IntegerField(null=True, blank=True)

    # Functional headcount
    hr_ir_count = models.IntegerField(default=0)
    finance_account_count = models.IntegerField(default=0)
    sales_marketing_count = models.IntegerField(default=0)
    operations_count = models.IntegerField(default=0)
    it_count = models.IntegerField(default=0)

    class Meta(Record.Meta):
        db_table = 'employability'

    def __str__(self):
        return f"Headcount {self.date}"


class QualityEntry(Record):
    """Daily production, rejection, return and rework figures."""
    date = models.DateField(null=True, blank=True, db_index=True)
    product_produced = models.IntegerField(default=0)
    product_rejected = models.IntegerField(default=0)
    reason_for_rejection = models.CharField(max_length=100, null=True, blank=True)
    product_shipped = models.IntegerField(default=0)
    product_returned = models.IntegerField(default=0)
    product_remake = models.IntegerField(default=0)
    cost_of_remake = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    product_repaired = models.IntegerField(default=0)
    cost_of_repair = models.DecimalField(max_digits=15, decimal_places=2, default=0)

    class Meta(Record.Meta):
        db_table = 'quality'

    def __str__(self):
        return f"Quality {self.date}: {self.product_rejected}/{self.product_produced} rejected"


class DeliveryEntry(Record):
    """One customer order and how its shipment went."""
    order_date = models.DateField(null=True, blank=True, db_index=True)
    order_value = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    estimated_ship_date = models.DateField(null=True, blank=True)
    actual_ship_date = models.DateField(null=True, blank=True)
    lead_time = models.IntegerField(null=True, blank=True, help_text="Days")
    delayed = models.IntegerField(default=0, help_text="1 if shipped late, else 0")
    delayed_order_value = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    reason_for_delay = models.CharField(max_length=100, null=True, blank=True)

    class Meta(Record.Meta):
        db_table = 'delivery'

    def __str__(self):
        return f"Order {self.order_date} ({'delayed' if self.delayed else 'on time'})"
