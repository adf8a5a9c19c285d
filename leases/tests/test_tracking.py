from datetime import date

from django.test import TestCase

from leases.models import Lease
from leases.services.lifecycle import void_lease
from leases.services.settlement import mark_payment_paid
from leases.services.tracking import has_active_lease_coverage, overdue_payments, upcoming_payments
from leases.tests.helpers import make_lease, make_parties

TODAY = date(2024, 3, 15)


class PaymentTrackingTests(TestCase):
    def setUp(self):
        self.property, self.farmer = make_parties()
        self.lease = make_lease(self.property, self.farmer)

    def test_upcoming_payments_within_window(self):
        upcoming = list(upcoming_payments(today=TODAY))
        self.assertEqual([p.due_date for p in upcoming], [date(2024, 4, 1)])
        wider = list(upcoming_payments(within_days=60, today=TODAY))
        self.assertEqual([p.due_date for p in wider], [date(2024, 4, 1), date(2024, 5, 1)])

    def test_overdue_payments_skip_settled(self):
        self.assertEqual(overdue_payments(today=TODAY).count(), 3)
        mark_payment_paid(self.lease.payments.get(sequence=1), date(2024, 1, 4))
        self.assertEqual(
            [p.sequence for p in overdue_payments(today=TODAY)],
            [2, 3],
        )

    def test_void_leases_are_not_tracked(self):
        void_lease(self.lease)
        self.assertFalse(upcoming_payments(today=TODAY).exists())
        self.assertFalse(overdue_payments(today=TODAY).exists())

    def test_payment_helpers(self):
        march = self.lease.payments.get(sequence=3)
        april = self.lease.payments.get(sequence=4)
        self.assertTrue(march.is_overdue(TODAY))
        self.assertFalse(march.is_due_soon(TODAY))
        self.assertTrue(april.is_due_soon(TODAY))
        self.assertFalse(april.is_due_soon(TODAY, days=7))
        self.assertFalse(april.is_overdue(TODAY))

    def test_active_lease_coverage(self):
        self.assertTrue(has_active_lease_coverage(self.property, TODAY))
        self.assertFalse(has_active_lease_coverage(self.property, date(2025, 2, 1)))
        Lease.objects.filter(pk=self.lease.pk).update(status=Lease.Status.EXPIRED)
        self.assertFalse(has_active_lease_coverage(self.property, TODAY))
