import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.expenses.services import create_expense
from apps.groups.services import create_group, add_member


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def payer(db):
    """User A: basic plan, no groups yet."""
    return User.objects.create_user(
        email='payer@example.com',
        password='TestPass123!',
        name='Payer',
        country='UAE',
        email_verified=True,
    )


@pytest.fixture
def friend(db):
    return User.objects.create_user(
        email='friend@example.com',
        password='TestPass123!',
        name='Friend',
        country='India',
        email_verified=True,
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        name='Outsider',
        email_verified=True,
    )


@pytest.fixture
def group(payer, friend):
    group = create_group(name='Trip', owner=payer)
    add_member(group_id=group.id, added_by=payer, name=friend.name, email=friend.email)
    return group


@pytest.fixture
def shared_expense(payer, friend, group):
    """Amount 100 split 60/40 between payer and friend."""
    return create_expense(
        paid_by=payer,
        description='Dinner',
        amount=Decimal('100.00'),
        category='food',
        group_id=group.id,
        split_type='custom',
        participants=[
            {'user': payer.id, 'share': Decimal('60.00')},
            {'user': friend.id, 'share': Decimal('40.00')},
        ],
    )


@pytest.fixture
def payer_client(payer):
    return client_for(payer)


@pytest.fixture
def friend_client(friend):
    return client_for(friend)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)
