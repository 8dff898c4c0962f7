import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, PlanTier, SubscriptionStatus
from apps.subscriptions.services import LimitGate


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Basic-plan user inside the subscription period."""
    return User.objects.create_user(
        email='subscriber@example.com',
        password='TestPass123!',
        name='Subscriber',
        email_verified=True,
    )


@pytest.fixture
def premium_user(db):
    return User.objects.create_user(
        email='premium@example.com',
        password='TestPass123!',
        name='Premium',
        plan=PlanTier.PREMIUM,
    )


@pytest.fixture
def expired_user(db):
    """Active user whose period ended yesterday."""
    return User.objects.create_user(
        email='expired@example.com',
        password='TestPass123!',
        name='Expired',
        subscription_status=SubscriptionStatus.ACTIVE,
        current_period_end=timezone.now() - timedelta(days=1),
    )


@pytest.fixture
def gate():
    return LimitGate()


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
