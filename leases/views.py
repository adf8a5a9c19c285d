from __future__ import annotations

import logging

from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import (
    AgreementIntegrityError,
    AgreementNotFound,
    ArtifactExists,
    FileCreationFailed,
    InvalidArtifactName,
    InvalidTemplate,
    LeaseError,
    PaymentStateError,
    TemplateNotFound,
    WorkingTemplateNotFound,
)
from .models import Lease, LedgerEntry, Payment
from .serializers import (
    LeaseCreateSerializer,
    LeaseRenewSerializer,
    LeaseSerializer,
    LedgerEntrySerializer,
    MarkPaidSerializer,
    PaymentSerializer,
)
from .services import exports, lifecycle, settlement
from .services.repository import TemplateRepository, Tier

logger = logging.getLogger(__name__)

ERROR_STATUS = [
    ((TemplateNotFound, WorkingTemplateNotFound, AgreementNotFound), status.HTTP_404_NOT_FOUND),
    ((ArtifactExists, PaymentStateError, AgreementIntegrityError), status.HTTP_409_CONFLICT),
    ((InvalidTemplate, InvalidArtifactName), status.HTTP_400_BAD_REQUEST),
    ((FileCreationFailed,), status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def lease_error_response(exc: LeaseError) -> Response:
    code = status.HTTP_400_BAD_REQUEST
    for kinds, mapped in ERROR_STATUS:
        if isinstance(exc, kinds):
            code = mapped
            break
    payload = {"detail": str(exc)}
    if isinstance(exc, AgreementIntegrityError):
        payload.update({"valid": False, "expected_hash": exc.expected, "actual_hash": exc.actual})
    if code >= 500:
        logger.error("Lease operation failed: %s", exc)
    return Response(payload, status=code)


def _attachment(body: str, content_type: str, filename: str) -> HttpResponse:
    response = HttpResponse(body, content_type=f"{content_type}; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


class TemplateListView(APIView):
    def get(self, request, *args, **kwargs):
        repository = TemplateRepository.from_settings()
        return Response({"templates": repository.list_names(Tier.TEMPLATES)})


class LeaseCreateView(APIView):
    def post(self, request, *args, **kwargs):
        serializer = LeaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            lease, info = lifecycle.create_lease(**serializer.validated_data)
        except LeaseError as exc:
            return lease_error_response(exc)
        data = LeaseSerializer(lease).data
        data["agreement_short_hash"] = info.short_hash
        return Response(data, status=status.HTTP_201_CREATED)


class LeaseRenewView(APIView):
    def post(self, request, pk, *args, **kwargs):
        lease = get_object_or_404(Lease.objects.select_related("property", "farmer"), pk=pk)
        serializer = LeaseRenewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        options = dict(serializer.validated_data)
        options["template_name"] = options.get("template_name") or None
        try:
            renewal, _ = lifecycle.renew_lease(lease, **options)
        except LeaseError as exc:
            return lease_error_response(exc)
        return Response(LeaseSerializer(renewal).data, status=status.HTTP_201_CREATED)


class LeaseVoidView(APIView):
    def post(self, request, pk, *args, **kwargs):
        lease = get_object_or_404(Lease, pk=pk)
        lifecycle.void_lease(lease)
        return Response(LeaseSerializer(lease).data)


class LeaseVerifyView(APIView):
    def get(self, request, pk, *args, **kwargs):
        lease = get_object_or_404(Lease, pk=pk)
        try:
            actual = lifecycle.verify_lease_agreement(lease)
        except LeaseError as exc:
            return lease_error_response(exc)
        return Response({"valid": True, "file_name": lease.agreement_file_name, "hash": actual})


class LeaseSummaryView(APIView):
    def get(self, request, pk, *args, **kwargs):
        lease = get_object_or_404(Lease.objects.select_related("property", "farmer"), pk=pk)
        body = exports.render_lease_summary(lease, list(lease.payments.all()))
        filename = f"lease_summary_{lease.property.name}_{lease.start_date:%Y}.md".replace(" ", "_")
        return _attachment(body, exports.ExportFormat.MARKDOWN.content_type, filename)


class LeaseScheduleCsvView(APIView):
    def get(self, request, pk, *args, **kwargs):
        lease = get_object_or_404(Lease, pk=pk)
        body = exports.export_payment_schedule_csv(list(lease.payments.all()))
        return _attachment(body, exports.ExportFormat.CSV.content_type, f"payment_schedule_{lease.reference}.csv")


class PaymentMarkPaidView(APIView):
    def post(self, request, pk, *args, **kwargs):
        payment = get_object_or_404(Payment, pk=pk)
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            entry = settlement.mark_payment_paid(
                payment,
                serializer.validated_data.get("paid_date"),
                reference_number=serializer.validated_data.get("reference_number"),
            )
        except LeaseError as exc:
            return lease_error_response(exc)
        return Response({"payment": PaymentSerializer(payment).data, "ledger_entry": LedgerEntrySerializer(entry).data})


class PaymentMarkUnpaidView(APIView):
    def post(self, request, pk, *args, **kwargs):
        payment = get_object_or_404(Payment, pk=pk)
        try:
            reversal = settlement.mark_payment_unpaid(payment)
        except LeaseError as exc:
            return lease_error_response(exc)
        return Response({"payment": PaymentSerializer(payment).data, "reversal": LedgerEntrySerializer(reversal).data})


class LedgerExportView(APIView):
    def get(self, request, *args, **kwargs):
        raw_format = (request.query_params.get("format") or exports.ExportFormat.MARKDOWN.value).lower()
        try:
            fmt = exports.ExportFormat(raw_format)
        except ValueError:
            return Response({"detail": f"Unsupported export format '{raw_format}'."}, status=status.HTTP_400_BAD_REQUEST)

        entries = LedgerEntry.objects.all()
        date_range = None
        start_raw = request.query_params.get("start")
        end_raw = request.query_params.get("end")
        if start_raw or end_raw:
            try:
                start = parse_date(start_raw or "")
                end = parse_date(end_raw or "")
            except ValueError:
                start = end = None
            if not start or not end or end < start:
                return Response({"detail": "start and end must be valid dates (YYYY-MM-DD), start <= end."}, status=status.HTTP_400_BAD_REQUEST)
            entries = entries.filter(posted_at__date__gte=start, posted_at__date__lte=end)
            date_range = (start, end)

        now = timezone.now()
        body = exports.export_ledger(list(entries), fmt, generated_at=now, date_range=date_range)
        filename = f"ledger_export_{timezone.localtime(now):%Y%m%d_%H%M}.{fmt.extension}"
        return _attachment(body, fmt.content_type, filename)
