from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class Country(models.TextChoices):
    UAE = 'UAE', 'United Arab Emirates'
    INDIA = 'India', 'India'


class PlanTier(models.TextChoices):
    BASIC = 'basic', 'Basic'
    PREMIUM = 'premium', 'Premium'
    BUSINESS = 'business', 'Business'


class SubscriptionStatus(models.TextChoices):
    TRIALING = 'trialing', 'Trialing'
    ACTIVE = 'active', 'Active'
    PAST_DUE = 'past_due', 'Past due'
    CANCELED = 'canceled', 'Canceled'
    INCOMPLETE = 'incomplete', 'Incomplete'


def default_period_end():
    """End of the initial (trial) subscription period."""
    return timezone.now() + timedelta(days=settings.TRIAL_PERIOD_DAYS)


def default_plan():
    """Plan given to new accounts; unknown values fall back to basic."""
    plan = settings.DEFAULT_PLAN
    return plan if plan in PlanTier.values else PlanTier.BASIC


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def normalize_email(self, email):
        # Emails are unique case-insensitively, so store them lowercased
        return super().normalize_email(email).strip().lower()

    def get_by_natural_key(self, email):
        return self.get(email__iexact=email)

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Account with subscription state and usage counters."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    name = models.CharField(max_length=50)
    avatar = models.CharField(max_length=500, blank=True)
    currency = models.CharField(max_length=3, default='USD')
    country = models.CharField(max_length=10, choices=Country.choices, default=Country.UAE)

    # Subscription
    plan = models.CharField(max_length=20, choices=PlanTier.choices, default=default_plan)
    subscription_status = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.ACTIVE
    )
    current_period_end = models.DateTimeField(default=default_period_end)

    # Usage counters
    groups_created = models.PositiveIntegerField(default=0)
    members_added = models.PositiveIntegerField(default=0)
    total_expenses = models.PositiveIntegerField(default=0)
    usage_last_reset = models.DateTimeField(default=timezone.now)

    # Verification
    email_verified = models.BooleanField(default=False)
    verification_code = models.CharField(max_length=6, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_9a1f3c_idx'),
        ]

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def get_display_name(self):
        """Return name or email prefix."""
        return self.name or self.email.split('@')[0]

    @property
    def billing_currency(self):
        """Ledger currency derived from the account's country."""
        return 'INR' if self.country == Country.INDIA else 'AED'
