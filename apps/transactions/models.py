from decimal import Decimal
from django.db import models
import uuid


class TransactionType(models.TextChoices):
    SUBSCRIPTION = 'subscription', 'Subscription'
    SETTLEMENT_FEE = 'settlement_fee', 'Settlement fee'
    PAYOUT = 'payout', 'Payout'


class TransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'
    FAILED = 'failed', 'Failed'
    REFUNDED = 'refunded', 'Refunded'


class Currency(models.TextChoices):
    AED = 'AED', 'UAE Dirham'
    INR = 'INR', 'Indian Rupee'
    USD = 'USD', 'US Dollar'


class PaymentGateway(models.TextChoices):
    STRIPE = 'stripe', 'Stripe'
    RAZORPAY = 'razorpay', 'Razorpay'
    MANUAL = 'manual', 'Manual'


# Status changes allowed after a transaction is written
STATUS_TRANSITIONS = {
    TransactionStatus.PENDING: {TransactionStatus.COMPLETED, TransactionStatus.FAILED},
    TransactionStatus.COMPLETED: {TransactionStatus.REFUNDED},
    TransactionStatus.FAILED: set(),
    TransactionStatus.REFUNDED: set(),
}


class TransactionQuerySet(models.QuerySet):

    def delete(self):
        raise ValueError("Transactions are append-only and cannot be deleted")

    def revenue(self):
        """Completed transactions that count as founder revenue."""
        return self.filter(
            status=TransactionStatus.COMPLETED,
            type__in=[TransactionType.SUBSCRIPTION, TransactionType.SETTLEMENT_FEE],
        )


class Transaction(models.Model):
    """
    Append-only ledger entry.

    Once written only ``status`` may change, and only along
    ``STATUS_TRANSITIONS``. Rows are never deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=TransactionType.choices)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='transactions'
    )

    # Amounts; fee and net keep the unrounded result of the fee rate
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, choices=Currency.choices)
    fee = models.DecimalField(max_digits=16, decimal_places=6, default=Decimal('0'))
    net_amount = models.DecimalField(max_digits=16, decimal_places=6)
    description = models.CharField(max_length=255, blank=True)

    # Gateway details (empty in trial mode)
    payment_gateway = models.CharField(
        max_length=20,
        choices=PaymentGateway.choices,
        null=True,
        blank=True
    )
    gateway_transaction_id = models.CharField(max_length=255, null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING
    )
    metadata = models.JSONField(default=dict, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TransactionQuerySet.as_manager()

    IMMUTABLE_FIELDS = (
        'type', 'user_id', 'amount', 'currency', 'fee', 'net_amount',
        'description', 'payment_gateway', 'gateway_transaction_id', 'metadata',
    )

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='transaction_user_id_6e1c2a_idx'),
            models.Index(fields=['type', 'status', 'created_at'], name='transaction_type_st_9d4b70_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} {self.amount} {self.currency} ({self.status})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            stored = Transaction.objects.filter(pk=self.pk).values(*self.IMMUTABLE_FIELDS).first()
            if stored is not None:
                changed = [
                    field for field, value in stored.items()
                    if value != getattr(self, field)
                ]
                if changed:
                    raise ValueError(
                        f"Transactions are append-only; cannot change {', '.join(changed)}"
                    )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Transactions are append-only and cannot be deleted")

    def can_transition_to(self, new_status):
        return new_status in STATUS_TRANSITIONS.get(self.status, set())

    def transition_status(self, new_status):
        """Move to ``new_status`` if the ledger rules allow it."""
        if not self.can_transition_to(new_status):
            raise ValueError(f"Cannot change transaction status from {self.status} to {new_status}")

        self.status = new_status
        self.save(update_fields=['status', 'updated_at'])
