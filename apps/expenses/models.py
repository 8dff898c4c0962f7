from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class Category(models.TextChoices):
    FOOD = 'food', 'Food'
    TRANSPORT = 'transport', 'Transport'
    SHOPPING = 'shopping', 'Shopping'
    ENTERTAINMENT = 'entertainment', 'Entertainment'
    BILLS = 'bills', 'Bills'
    HEALTHCARE = 'healthcare', 'Healthcare'
    EDUCATION = 'education', 'Education'
    OTHER = 'other', 'Other'


class SplitType(models.TextChoices):
    EQUAL = 'equal', 'Equal'
    CUSTOM = 'custom', 'Custom'
    PERCENTAGE = 'percentage', 'Percentage'


class Expense(models.Model):
    """Amount paid by one user, optionally within a group, split among participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    description = models.CharField(max_length=100)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    currency = models.CharField(max_length=3, default='USD')
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    date = models.DateField(default=timezone.localdate)

    paid_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='expenses_paid'
    )

    # Group context (nullable for personal expenses)
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='expenses'
    )

    split_type = models.CharField(max_length=20, choices=SplitType.choices, default=SplitType.EQUAL)
    is_settled = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['paid_by', 'date'], name='expenses_paid_by_5d1e08_idx'),
            models.Index(fields=['group', 'date'], name='expenses_group_i_a47c33_idx'),
            models.Index(fields=['is_settled'], name='expenses_is_sett_2b8f61_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.description} - {self.amount} {self.currency}"

    @property
    def is_locked(self):
        """Amount and participants are frozen once anyone has paid."""
        return self.participants.filter(paid=True).exists()

    def update_settled_status(self):
        """Settled exactly when every participant has paid."""
        self.is_settled = not self.participants.filter(paid=False).exists()
        self.save(update_fields=['is_settled', 'updated_at'])


class Participant(models.Model):
    """One user's share of an expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    expense = models.ForeignKey(Expense, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='expense_shares'
    )
    share = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    position = models.PositiveSmallIntegerField(default=0)

    # Settlement tracking
    paid = models.BooleanField(default=False)
    settled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'expense_participants'
        unique_together = [['expense', 'user']]
        indexes = [
            models.Index(fields=['user', 'paid'], name='expense_par_user_id_7c3e95_idx'),
        ]
        ordering = ['position']

    def __str__(self):
        return f"{self.user.get_display_name()} owes {self.share} ({'paid' if self.paid else 'unpaid'})"

    def mark_paid(self):
        self.paid = True
        self.settled_at = timezone.now()
        self.save(update_fields=['paid', 'settled_at'])
