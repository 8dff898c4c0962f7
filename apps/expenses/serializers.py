from rest_framework import serializers
from .models import Expense, Participant, Category, SplitType
from apps.accounts.serializers import UserMinimalSerializer
from apps.groups.models import Group


class GroupMinimalSerializer(serializers.ModelSerializer):
    """Minimal group info for nested serialization."""

    class Meta:
        model = Group
        fields = ['id', 'name']
        read_only_fields = fields


class ParticipantSerializer(serializers.ModelSerializer):
    """Serializer for participant shares."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Participant
        fields = ['id', 'user', 'share', 'paid', 'settled_at']
        read_only_fields = fields


class ExpenseSerializer(serializers.ModelSerializer):
    """Main serializer for expenses."""

    paid_by = UserMinimalSerializer(read_only=True)
    group = GroupMinimalSerializer(read_only=True)
    participants = ParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'description',
            'amount',
            'currency',
            'category',
            'date',
            'paid_by',
            'group',
            'split_type',
            'participants',
            'is_settled',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ParticipantInputSerializer(serializers.Serializer):
    """One participant in a create/update request."""

    user = serializers.UUIDField()
    share = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Validate expense creation input.

    Description and amount are only type-checked here; their business
    rules live in the service layer.
    """

    description = serializers.CharField(allow_blank=True, trim_whitespace=False)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False)
    category = serializers.ChoiceField(choices=Category.choices, default=Category.OTHER)
    date = serializers.DateField(required=False)
    group = serializers.UUIDField(required=False, allow_null=True)
    split_type = serializers.ChoiceField(choices=SplitType.choices, default=SplitType.EQUAL)
    participants = ParticipantInputSerializer(many=True, required=False)


class ExpenseUpdateSerializer(serializers.Serializer):
    """Validate expense update input; omitted fields stay unchanged."""

    description = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    currency = serializers.CharField(max_length=3, required=False)
    category = serializers.ChoiceField(choices=Category.choices, required=False)
    date = serializers.DateField(required=False)
    split_type = serializers.ChoiceField(choices=SplitType.choices, required=False)
    participants = ParticipantInputSerializer(many=True, required=False)


class SettleSerializer(serializers.Serializer):
    """Validate settlement input."""

    participant_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class FeeBreakdownSerializer(serializers.Serializer):
    settlement_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    founder_fee = serializers.DecimalField(max_digits=16, decimal_places=6)
    net_to_payee = serializers.DecimalField(max_digits=16, decimal_places=6)
    fee_percentage = serializers.CharField()


class ExpenseSummarySerializer(serializers.Serializer):
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_count = serializers.IntegerField()
    category_summary = serializers.DictField(
        child=serializers.DecimalField(max_digits=14, decimal_places=2)
    )
