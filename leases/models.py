import uuid
from datetime import date, timedelta
from decimal import Decimal

from django.db import models


class Property(models.Model):
    name = models.CharField(max_length=255)
    county = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=50, blank=True)
    total_acres = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    tillable_acres = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Properties"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Farmer(models.Model):
    name = models.CharField(max_length=255)
    org_name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class RentFrequency(models.TextChoices):
    MONTHLY = "monthly", "Monthly"
    QUARTERLY = "quarterly", "Quarterly"
    SEMI_ANNUAL = "semi-annual", "Semi-Annual"
    ANNUAL = "annual", "Annual"


class Lease(models.Model):
    class LeaseType(models.TextChoices):
        CASH_RENT = "cash_rent", "Cash Rent"
        CROP_SHARE = "crop_share", "Crop Share"
        FLEXIBLE_CASH_RENT = "flexible_cash_rent", "Flexible Cash Rent"
        PASTURE = "pasture", "Pasture / Grazing"
        CUSTOM_FARMING = "custom_farming", "Custom Farming"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        VOID = "void", "Void"
        EXPIRED = "expired", "Expired"

    reference = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    lease_type = models.CharField(max_length=32, choices=LeaseType.choices, default=LeaseType.CASH_RENT)
    start_date = models.DateField()
    end_date = models.DateField()
    growing_year = models.PositiveIntegerField()
    rent_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Total rent for the covered term.",
    )
    rent_frequency = models.CharField(
        max_length=16,
        choices=RentFrequency.choices,
        default=RentFrequency.ANNUAL,
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE, db_index=True)
    property = models.ForeignKey(Property, on_delete=models.PROTECT, related_name="leases")
    farmer = models.ForeignKey(Farmer, on_delete=models.PROTECT, related_name="leases")
    renewed_from = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="renewals",
    )
    agreement_file_name = models.CharField(max_length=255, blank=True)
    agreement_path = models.CharField(max_length=1024, blank=True)
    agreement_hash = models.CharField(max_length=64, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="lease_end_after_start",
            ),
            models.CheckConstraint(
                condition=models.Q(rent_amount__gte=0),
                name="lease_rent_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.property} – {self.farmer} ({self.start_date:%Y})"


class Payment(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"

    lease = models.ForeignKey(Lease, on_delete=models.CASCADE, related_name="payments")
    sequence = models.PositiveSmallIntegerField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateField(db_index=True)
    is_paid = models.BooleanField(default=False)
    paid_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    reference_number = models.CharField(max_length=64, blank=True)
    memo = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["lease_id", "sequence"]
        constraints = [
            models.UniqueConstraint(fields=["lease", "sequence"], name="unique_payment_sequence_per_lease"),
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="payment_amount_non_negative",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(is_paid=False, paid_date__isnull=True)
                    | models.Q(is_paid=True, paid_date__isnull=False)
                ),
                name="payment_paid_date_matches_flag",
            ),
        ]

    def __str__(self):
        return f"Payment {self.sequence} – {self.due_date} – {self.amount}"

    @property
    def ledger_entry(self):
        """The active revenue entry for a settled payment, if any."""
        return (
            self.ledger_entries.filter(entry_type=LedgerEntry.EntryType.REVENUE, is_void=False)
            .order_by("-id")
            .first()
        )

    def is_overdue(self, today: date | None = None) -> bool:
        today = today or date.today()
        return not self.is_paid and self.due_date < today

    def is_due_soon(self, today: date | None = None, days: int = 30) -> bool:
        today = today or date.today()
        return not self.is_paid and today <= self.due_date <= today + timedelta(days=days)


class LedgerEntry(models.Model):
    class EntryType(models.TextChoices):
        REVENUE = "revenue", "Revenue"
        REVERSAL = "reversal", "Reversal"

    lease = models.ForeignKey(Lease, on_delete=models.PROTECT, related_name="ledger_entries")
    payment = models.ForeignKey(Payment, on_delete=models.PROTECT, related_name="ledger_entries")
    posted_at = models.DateTimeField(db_index=True)
    debit_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    credit_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    account_code = models.CharField(max_length=20)
    account_name = models.CharField(max_length=255)
    entry_type = models.CharField(max_length=16, choices=EntryType.choices)
    description = models.CharField(max_length=255)
    reference_number = models.CharField(max_length=64, blank=True)
    vendor_name = models.CharField(max_length=255, blank=True)
    is_reconciled = models.BooleanField(default=False)
    is_approved = models.BooleanField(default=False)
    is_void = models.BooleanField(default=False)
    reversal_of = models.OneToOneField(
        "self",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="reversed_by",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Ledger entries"
        ordering = ["-posted_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(debit_amount__gte=0) & models.Q(credit_amount__gte=0),
                name="ledger_entry_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(debit_amount=0) | models.Q(credit_amount=0),
                name="ledger_entry_single_side",
            ),
            models.UniqueConstraint(
                fields=["payment"],
                condition=models.Q(entry_type="revenue", is_void=False),
                name="unique_active_revenue_entry_per_payment",
            ),
        ]

    def __str__(self):
        return f"{self.posted_at:%Y-%m-%d} – {self.account_code} – {self.description}"
