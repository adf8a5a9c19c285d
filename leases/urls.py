from django.urls import path

from .views import (
    LeaseCreateView,
    LeaseRenewView,
    LeaseScheduleCsvView,
    LeaseSummaryView,
    LeaseVerifyView,
    LeaseVoidView,
    LedgerExportView,
    PaymentMarkPaidView,
    PaymentMarkUnpaidView,
    TemplateListView,
)

urlpatterns = [
    path("templates/", TemplateListView.as_view(), name="lease-templates"),
    path("leases/", LeaseCreateView.as_view(), name="lease-create"),
    path("leases/<int:pk>/renew/", LeaseRenewView.as_view(), name="lease-renew"),
    path("leases/<int:pk>/void/", LeaseVoidView.as_view(), name="lease-void"),
    path("leases/<int:pk>/verify/", LeaseVerifyView.as_view(), name="lease-verify"),
    path("leases/<int:pk>/summary/", LeaseSummaryView.as_view(), name="lease-summary"),
    path("leases/<int:pk>/schedule.csv", LeaseScheduleCsvView.as_view(), name="lease-schedule-csv"),
    path("payments/<int:pk>/mark-paid/", PaymentMarkPaidView.as_view(), name="payment-mark-paid"),
    path("payments/<int:pk>/mark-unpaid/", PaymentMarkUnpaidView.as_view(), name="payment-mark-unpaid"),
    path("ledger/export/", LedgerExportView.as_view(), name="ledger-export"),
]
