from django.contrib import admin

from .models import Farmer, Lease, LedgerEntry, Payment, Property


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ("sequence", "due_date", "amount", "status", "paid_date", "reference_number", "memo")
    readonly_fields = fields
    can_delete = False


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "county", "state", "total_acres", "tillable_acres")
    search_fields = ("name", "county")


@admin.register(Farmer)
class FarmerAdmin(admin.ModelAdmin):
    list_display = ("name", "org_name", "email", "phone")
    search_fields = ("name", "org_name", "email")


@admin.register(Lease)
class LeaseAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "property",
        "farmer",
        "lease_type",
        "start_date",
        "end_date",
        "rent_amount",
        "rent_frequency",
        "status",
        "short_hash",
    )
    list_filter = ("status", "lease_type", "rent_frequency")
    search_fields = ("property__name", "farmer__name", "agreement_file_name")
    readonly_fields = ("reference", "agreement_file_name", "agreement_path", "agreement_hash", "renewed_from")
    inlines = [PaymentInline]

    @admin.display(description="Hash")
    def short_hash(self, obj):
        return obj.agreement_hash[:8]


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = (
        "posted_at",
        "account_code",
        "description",
        "debit_amount",
        "credit_amount",
        "entry_type",
        "is_void",
    )
    list_filter = ("entry_type", "is_void", "is_reconciled", "is_approved")
    search_fields = ("description", "reference_number")

    def has_delete_permission(self, request, obj=None):
        return False
