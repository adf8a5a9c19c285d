from __future__ import annotations

from rest_framework import serializers

from .models import Farmer, Lease, LedgerEntry, Payment, Property, RentFrequency


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "sequence",
            "amount",
            "due_date",
            "is_paid",
            "paid_date",
            "status",
            "reference_number",
            "memo",
        ]
        read_only_fields = fields


class LedgerEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "posted_at",
            "account_code",
            "account_name",
            "entry_type",
            "description",
            "debit_amount",
            "credit_amount",
            "reference_number",
            "is_void",
            "reversal_of",
        ]
        read_only_fields = fields


class LeaseSerializer(serializers.ModelSerializer):
    property_name = serializers.CharField(source="property.name", read_only=True)
    farmer_name = serializers.CharField(source="farmer.name", read_only=True)
    agreement_short_hash = serializers.SerializerMethodField()
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Lease
        fields = [
            "id",
            "reference",
            "lease_type",
            "status",
            "start_date",
            "end_date",
            "growing_year",
            "rent_amount",
            "rent_frequency",
            "property",
            "property_name",
            "farmer",
            "farmer_name",
            "renewed_from",
            "agreement_file_name",
            "agreement_hash",
            "agreement_short_hash",
            "notes",
            "payments",
        ]
        read_only_fields = fields

    def get_agreement_short_hash(self, obj: Lease) -> str:
        return obj.agreement_hash[:8]


class LeaseCreateSerializer(serializers.Serializer):
    property = serializers.PrimaryKeyRelatedField(queryset=Property.objects.all())
    farmer = serializers.PrimaryKeyRelatedField(queryset=Farmer.objects.all())
    template_name = serializers.CharField(max_length=200)
    lease_type = serializers.ChoiceField(choices=Lease.LeaseType.choices, default=Lease.LeaseType.CASH_RENT)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    growing_year = serializers.IntegerField(required=False, min_value=1900)
    rent_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    rent_frequency = serializers.ChoiceField(choices=RentFrequency.choices, default=RentFrequency.ANNUAL)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date."})
        return attrs


class LeaseRenewSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    rent_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    rent_frequency = serializers.ChoiceField(choices=RentFrequency.choices, required=False)
    template_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be on or after the start date."})
        return attrs


class MarkPaidSerializer(serializers.Serializer):
    paid_date = serializers.DateField(required=False)
    reference_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
