from rest_framework import serializers

from apps.accounts.models import Country, PlanTier


class PlanLimitsSerializer(serializers.Serializer):
    max_groups = serializers.IntegerField()
    max_members_per_group = serializers.IntegerField()
    can_upload_receipts = serializers.BooleanField()
    can_use_categories = serializers.BooleanField()
    can_create_business_groups = serializers.BooleanField()
    can_use_multi_currency = serializers.BooleanField()
    can_export_data = serializers.BooleanField()
    can_use_api = serializers.BooleanField()
    price = serializers.DecimalField(max_digits=8, decimal_places=2)


class PlanSerializer(PlanLimitsSerializer):
    name = serializers.CharField()


class UsageSerializer(serializers.Serializer):
    groups_created = serializers.IntegerField()
    members_added = serializers.IntegerField()
    total_expenses = serializers.IntegerField()
    last_reset = serializers.DateTimeField()


class SubscriptionSummarySerializer(serializers.Serializer):
    plan = serializers.CharField()
    status = serializers.CharField()
    current_period_end = serializers.DateTimeField()
    limits = PlanLimitsSerializer()
    usage = UsageSerializer()


class CreateSubscriptionSerializer(serializers.Serializer):
    """Input for starting a subscription checkout."""

    country = serializers.ChoiceField(choices=Country.choices, default=Country.UAE)
    plan = serializers.ChoiceField(choices=PlanTier.choices, default=PlanTier.BASIC)


class VerifyRazorpaySerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField(required=False, allow_blank=True)
    razorpay_payment_id = serializers.CharField(required=False, allow_blank=True)
    razorpay_signature = serializers.CharField(required=False, allow_blank=True)
