import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.services import create_group, add_member


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def group_owner(db):
    """Create and return a test user (group creator)."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        name='Group Owner',
        country='India',
        email_verified=True,
    )


@pytest.fixture
def member_user(db):
    """Create and return a user who will be added to the group."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        name='Group Member',
        email_verified=True,
    )


@pytest.fixture
def other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        name='Other User',
        email_verified=True,
    )


@pytest.fixture
def group(group_owner):
    """Group created through the service, so the owner's counter is 1."""
    return create_group(name='Flatmates', owner=group_owner, description='Rent and bills')


@pytest.fixture
def group_with_member(group, group_owner, member_user):
    add_member(
        group_id=group.id,
        added_by=group_owner,
        name=member_user.name,
        email=member_user.email,
    )
    return group


@pytest.fixture
def owner_client(group_owner):
    return client_for(group_owner)


@pytest.fixture
def member_client(member_user):
    return client_for(member_user)


@pytest.fixture
def other_client(other_user):
    return client_for(other_user)
