import decimal
import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Farmer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("org_name", models.CharField(blank=True, max_length=255)),
                ("email", models.EmailField(blank=True, max_length=255, null=True)),
                ("phone", models.CharField(blank=True, max_length=50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("county", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=50)),
                ("total_acres", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10)),
                ("tillable_acres", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "Properties",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Lease",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reference", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("lease_type", models.CharField(choices=[("cash_rent", "Cash Rent"), ("crop_share", "Crop Share"), ("flexible_cash_rent", "Flexible Cash Rent"), ("pasture", "Pasture / Grazing"), ("custom_farming", "Custom Farming")], default="cash_rent", max_length=32)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("growing_year", models.PositiveIntegerField()),
                ("rent_amount", models.DecimalField(decimal_places=2, help_text="Total rent for the covered term.", max_digits=12)),
                ("rent_frequency", models.CharField(choices=[("monthly", "Monthly"), ("quarterly", "Quarterly"), ("semi-annual", "Semi-Annual"), ("annual", "Annual")], default="annual", max_length=16)),
                ("status", models.CharField(choices=[("active", "Active"), ("void", "Void"), ("expired", "Expired")], db_index=True, default="active", max_length=16)),
                ("agreement_file_name", models.CharField(blank=True, max_length=255)),
                ("agreement_path", models.CharField(blank=True, max_length=1024)),
                ("agreement_hash", models.CharField(blank=True, max_length=64)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("farmer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="leases", to="leases.farmer")),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="leases", to="leases.property")),
                ("renewed_from", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="renewals", to="leases.lease")),
            ],
            options={
                "ordering": ["-start_date", "-id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="lease_end_after_start"),
                    models.CheckConstraint(condition=models.Q(("rent_amount__gte", 0)), name="lease_rent_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sequence", models.PositiveSmallIntegerField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("due_date", models.DateField(db_index=True)),
                ("is_paid", models.BooleanField(default=False)),
                ("paid_date", models.DateField(blank=True, null=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("paid", "Paid")], default="pending", max_length=16)),
                ("reference_number", models.CharField(blank=True, max_length=64)),
                ("memo", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("lease", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payments", to="leases.lease")),
            ],
            options={
                "ordering": ["lease_id", "sequence"],
                "constraints": [
                    models.UniqueConstraint(fields=("lease", "sequence"), name="unique_payment_sequence_per_lease"),
                    models.CheckConstraint(condition=models.Q(("amount__gte", 0)), name="payment_amount_non_negative"),
                    models.CheckConstraint(condition=models.Q(models.Q(("is_paid", False), ("paid_date__isnull", True)), models.Q(("is_paid", True), ("paid_date__isnull", False)), _connector="OR"), name="payment_paid_date_matches_flag"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("posted_at", models.DateTimeField(db_index=True)),
                ("debit_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=12)),
                ("credit_amount", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=12)),
                ("account_code", models.CharField(max_length=20)),
                ("account_name", models.CharField(max_length=255)),
                ("entry_type", models.CharField(choices=[("revenue", "Revenue"), ("reversal", "Reversal")], max_length=16)),
                ("description", models.CharField(max_length=255)),
                ("reference_number", models.CharField(blank=True, max_length=64)),
                ("vendor_name", models.CharField(blank=True, max_length=255)),
                ("is_reconciled", models.BooleanField(default=False)),
                ("is_approved", models.BooleanField(default=False)),
                ("is_void", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("lease", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="ledger_entries", to="leases.lease")),
                ("payment", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="ledger_entries", to="leases.payment")),
                ("reversal_of", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="reversed_by", to="leases.ledgerentry")),
            ],
            options={
                "verbose_name_plural": "Ledger entries",
                "ordering": ["-posted_at", "-id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("debit_amount__gte", 0), ("credit_amount__gte", 0)), name="ledger_entry_non_negative"),
                    models.CheckConstraint(condition=models.Q(("debit_amount", 0), ("credit_amount", 0), _connector="OR"), name="ledger_entry_single_side"),
                    models.UniqueConstraint(condition=models.Q(("entry_type", "revenue"), ("is_void", False)), fields=("payment",), name="unique_active_revenue_entry_per_payment"),
                ],
            },
        ),
    ]
