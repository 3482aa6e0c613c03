# Generated migration

from django.db import migrations, models
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SalesPipelineEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('enquiry_date', models.DateField(blank=True, db_index=True, null=True)),
                ('lead', models.CharField(blank=True, help_text='Yes/No flag', max_length=10, null=True)),
                ('lead_qualified_date', models.DateField(blank=True, null=True)),
                ('sales_order', models.CharField(blank=True, help_text='Order status, e.g. Won', max_length=20, null=True)),
                ('sales_order_date', models.DateField(blank=True, null=True)),
                ('sales_cycle', models.IntegerField(blank=True, help_text='Days', null=True)),
                ('invoice_date', models.DateField(blank=True, db_index=True, null=True)),
                ('invoice_value', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('city', models.CharField(blank=True, max_length=100, null=True)),
                ('state', models.CharField(blank=True, max_length=50, null=True)),
            ],
            options={
                'db_table': 'sales_pipeline',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='EmployabilityEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('date', models.DateField(blank=True, db_index=True, null=True)),
                ('admin_present', models.IntegerField(default=0)),
                ('admin_leave', models.IntegerField(default=0)),
                ('admin_separated', models.IntegerField(default=0)),
                ('admin_reason_attrition', models.CharField(blank=True, max_length=100, null=True)),
                ('dl_present', models.IntegerField(default=0)),
                ('dl_leave', models.IntegerField(default=0)),
                ('dl_separated', models.IntegerField(default=0)),
                ('dl_reason_attrition', models.CharField(blank=True, max_length=100, null=True)),
                ('idl_present', models.IntegerField(default=0)),
                ('idl_leave', models.IntegerField(default=0)),
                ('idl_separated', models.IntegerField(default=0)),
                ('idl_reason_attrition', models.CharField(blank=True, max_length=100, null=True)),
                ('total_days_to_recruit', models.IntegerField(blank=True, null=True)),
                ('hr_ir_count', models.IntegerField(default=0)),
                ('finance_account_count', models.IntegerField(default=0)),
                ('sales_marketing_count', models.IntegerField(default=0)),
                ('operations_count', models.IntegerField(default=0)),
                ('it_count', models.IntegerField(default=0)),
            ],
            options={
                'db_table': 'employability',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='QualityEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('date', models.DateField(blank=True, db_index=True, null=True)),
                ('product_produced', models.IntegerField(default=0)),
                ('product_rejected', models.IntegerField(default=0)),
                ('reason_for_rejection', models.CharField(blank=True, max_length=100, null=True)),
                ('product_shipped', models.IntegerField(default=0)),
                ('product_returned', models.IntegerField(default=0)),
                ('product_remake', models.IntegerField(default=0)),
                ('cost_of_remake', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ('product_repaired', models.IntegerField(default=0)),
                ('cost_of_repair', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
            ],
            options={
                'db_table': 'quality',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='DeliveryEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('order_date', models.DateField(blank=True, db_index=True, null=True)),
                ('order_value', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ('estimated_ship_date', models.DateField(blank=True, null=True)),
                ('actual_ship_date', models.DateField(blank=True, null=True)),
                ('lead_time', models.IntegerField(blank=True, help_text='Days', null=True)),
                ('delayed', models.IntegerField(default=0, help_text='1 if shipped late, else 0')),
                ('delayed_order_value', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ('reason_for_delay', models.CharField(blank=True, max_length=100, null=True)),
            ],
            options={
                'db_table': 'delivery',
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
    ]
