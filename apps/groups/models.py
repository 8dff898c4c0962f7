from decimal import Decimal
from django.db import models
import uuid


class Group(models.Model):
    """Named collection of members sharing expenses in one currency."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    currency = models.CharField(max_length=3, default='INR')
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='created_groups',
        editable=False
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='groups_created_4b7e2d_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self._state.adding:
            # created_by never changes after creation
            stored = Group.objects.filter(pk=self.pk).values_list('created_by_id', flat=True).first()
            if stored is not None and stored != self.created_by_id:
                raise ValueError("Group creator cannot be changed")
        super().save(*args, **kwargs)

    def has_member(self, user):
        return self.members.filter(user=user, is_active=True).exists()

    def is_admin(self, user):
        return self.created_by_id == getattr(user, 'pk', None)


class Member(models.Model):
    """Group member. ``user`` stays empty until the invitee registers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='group_memberships'
    )
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255)
    joined_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'group_members'
        unique_together = [['group', 'email']]
        indexes = [
            models.Index(fields=['group', 'joined_at'], name='group_membe_group_i_3e9a51_idx'),
            models.Index(fields=['email'], name='group_membe_email_8c2f17_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.name} <{self.email}> in {self.group.name}"

    def save(self, *args, **kwargs):
        self.email = self.email.strip().lower()
        super().save(*args, **kwargs)


class GroupBalance(models.Model):
    """Running net balance of one user within a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='balances')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_balances')
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'group_balances'
        unique_together = [['group', 'user']]
        ordering = ['-balance']

    def __str__(self):
        return f"{self.user} in {self.group.name}: {self.balance}"
