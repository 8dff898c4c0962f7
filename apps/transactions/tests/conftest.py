import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.transactions.models import Transaction, TransactionStatus, TransactionType


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='ledger@example.com',
        password='TestPass123!',
        name='Ledger User',
        country='India',
        email_verified=True,
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other User',
        email_verified=True,
    )


@pytest.fixture
def authenticated_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def make_transaction(user):
    """Factory for ledger rows; defaults to a completed settlement fee."""
    def _make(**overrides):
        amount = Decimal(str(overrides.pop('amount', '100.00')))
        fee = Decimal(str(overrides.pop('fee', amount * Decimal('0.015'))))
        fields = {
            'type': TransactionType.SETTLEMENT_FEE,
            'user': user,
            'amount': amount,
            'currency': 'INR',
            'fee': fee,
            'net_amount': amount - fee,
            'status': TransactionStatus.COMPLETED,
        }
        fields.update(overrides)
        return Transaction.objects.create(**fields)
    return _make
