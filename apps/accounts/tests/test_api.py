import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, PlanTier, SubscriptionStatus


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'name': 'New User',
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        tokens = response.data['data']['tokens']
        assert 'access' in tokens
        assert 'refresh' in tokens
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_starts_on_basic_plan(self, api_client):
        """New accounts start on the basic plan with zeroed usage."""
        url = reverse('users:register')
        data = {
            'name': 'Plan User',
            'email': 'plan@example.com',
            'password': 'SecurePass123!',
            'country': 'India',
        }
        api_client.post(url, data)

        user = User.objects.get(email='plan@example.com')
        assert user.plan == PlanTier.BASIC
        assert user.subscription_status == SubscriptionStatus.ACTIVE
        assert user.groups_created == 0
        assert user.members_added == 0
        assert user.billing_currency == 'INR'

    def test_register_lowercases_email(self, api_client):
        """Emails are stored lowercased."""
        url = reverse('users:register')
        data = {
            'name': 'Case User',
            'email': 'Mixed.Case@Example.com',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.filter(email='mixed.case@example.com').exists()

    def test_register_sends_verification_email(self, api_client):
        """A verification code is emailed on registration."""
        url = reverse('users:register')
        data = {
            'name': 'Mail User',
            'email': 'mail@example.com',
            'password': 'SecurePass123!',
        }
        api_client.post(url, data)

        user = User.objects.get(email='mail@example.com')
        assert len(user.verification_code) == 6
        assert any(user.verification_code in message.body for message in mail.outbox)

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email, regardless of case."""
        url = reverse('users:register')
        data = {
            'name': 'Duplicate',
            'email': user.email.upper(),
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['code'] == 'registration_failed'

    def test_register_missing_name(self, api_client):
        """Registration requires a name."""
        url = reverse('users:register')
        data = {
            'email': 'noname@example.com',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'name' in response.data['errors']

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'name': 'Weak',
            'email': 'weak@example.com',
            'password': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_invalid_email(self, api_client):
        """Registration fails with invalid email format."""
        url = reverse('users:register')
        data = {
            'name': 'Invalid',
            'email': 'not-an-email',
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['data']['tokens']
        assert response.data['data']['user']['email'] == user.email

    def test_login_case_insensitive_email(self, api_client, user):
        """Email lookup ignores case."""
        url = reverse('users:login')
        data = {
            'email': 'TestUser@Example.com',
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK

    def test_login_updates_last_login(self, api_client, user):
        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'email': user.email,
            'password': 'WrongPassword!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False
        assert response.data['message'] == 'Invalid email or password'

    def test_login_nonexistent_user(self, api_client):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'email': 'nobody@example.com',
            'password': 'SomePassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Deactivated accounts cannot log in."""
        url = reverse('users:login')
        data = {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'inactive_account'


# =============================================================================
# Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout(self, authenticated_client):
        url = reverse('users:logout')
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True, 'message': 'Logged out successfully'}


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestProfile:
    """Tests for GET/PUT/PATCH /api/auth/profile/"""

    def test_get_profile(self, authenticated_client, user):
        """Get current user's profile."""
        url = reverse('users:profile')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['user']['email'] == user.email
        assert response.data['data']['user']['plan'] == 'basic'

    def test_get_profile_unauthenticated(self, api_client):
        """Unauthenticated users get the error envelope."""
        url = reverse('users:profile')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_update_profile(self, authenticated_client, user):
        """Update profile name and currency."""
        url = reverse('users:profile')
        response = authenticated_client.patch(url, {'name': 'Updated Name', 'currency': 'INR'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.name == 'Updated Name'
        assert user.currency == 'INR'

    def test_update_profile_cannot_change_plan(self, authenticated_client, user):
        """Plan and counters are read-only through the profile."""
        url = reverse('users:profile')
        authenticated_client.patch(url, {'plan': 'business', 'subscription_status': 'canceled'})

        user.refresh_from_db()
        assert user.plan == PlanTier.BASIC
        assert user.subscription_status == SubscriptionStatus.ACTIVE


# =============================================================================
# Email Verification Tests
# =============================================================================

@pytest.mark.django_db
class TestEmailVerification:
    """Tests for email verification endpoints."""

    def test_verify_email_success(self, api_client, user_unverified):
        """Verify email with the emailed code."""
        url = reverse('users:verify-email')
        data = {'email': user_unverified.email, 'verification_code': '123456'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        user_unverified.refresh_from_db()
        assert user_unverified.email_verified is True
        assert user_unverified.verification_code == ''

    def test_verify_email_wrong_code(self, api_client, user_unverified):
        url = reverse('users:verify-email')
        data = {'email': user_unverified.email, 'verification_code': '000000'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_verification_code'

    def test_verify_email_unknown_user(self, api_client):
        url = reverse('users:verify-email')
        data = {'email': 'ghost@example.com', 'verification_code': '123456'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_resend_verification(self, api_client, user_unverified):
        """A new code replaces the old one and is emailed."""
        url = reverse('users:resend-verification')
        response = api_client.post(url, {'email': user_unverified.email})

        assert response.status_code == status.HTTP_200_OK
        user_unverified.refresh_from_db()
        assert len(user_unverified.verification_code) == 6
        assert mail.outbox[-1].to == [user_unverified.email]

    def test_resend_verification_already_verified(self, api_client, user):
        url = reverse('users:resend-verification')
        response = api_client.post(url, {'email': user.email})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'already_verified'
