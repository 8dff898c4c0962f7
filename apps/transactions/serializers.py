from rest_framework import serializers
from .models import Transaction


class TransactionSerializer(serializers.ModelSerializer):
    """Read-only view of a ledger entry."""

    class Meta:
        model = Transaction
        fields = [
            'id',
            'type',
            'amount',
            'currency',
            'fee',
            'net_amount',
            'description',
            'payment_gateway',
            'gateway_transaction_id',
            'status',
            'metadata',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CurrencyRevenueSerializer(serializers.Serializer):
    currency = serializers.CharField()
    total_revenue = serializers.DecimalField(max_digits=20, decimal_places=6)
    transaction_count = serializers.IntegerField()


class RevenueSerializer(serializers.Serializer):
    """Founder revenue summary for one period."""

    period = serializers.CharField()
    since = serializers.DateTimeField()
    total_revenue = serializers.DecimalField(max_digits=20, decimal_places=6)
    transaction_count = serializers.IntegerField()
    by_currency = CurrencyRevenueSerializer(many=True)


class RevenueQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=['month', 'year'], default='month')
