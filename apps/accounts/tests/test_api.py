import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, UserRole


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Valid credentials return JWT tokens."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == UserRole.SALES

    def test_login_updates_last_login(self, api_client, user):
        """Successful login records last_login."""
        assert user.last_login is None
        url = reverse('users:login')
        api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_email_case_insensitive(self, api_client, user):
        """Email lookup ignores case."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'AGENT@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        """Wrong password is rejected."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user.email,
            'password': 'WrongPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_unknown_email(self, api_client, db):
        """Unknown email is rejected the same way as a bad password."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'nobody@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Deactivated accounts cannot log in."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_missing_fields(self, api_client, db):
        """Missing password fails validation."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'agent@example.com'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        """Returns the authenticated user's profile."""
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email

    def test_get_current_user_unauthenticated(self, api_client):
        """Anonymous requests are rejected."""
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Staff Provisioning Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateStaff:
    """Tests for POST /api/auth/staff/"""

    def test_admin_creates_accountant(self, admin_client):
        """Administrators can provision accounts with a role."""
        url = reverse('users:create-staff')
        response = admin_client.post(url, {
            'email': 'accountant@example.com',
            'password': 'SecurePass123!',
            'display_name': 'Books Keeper',
            'role': UserRole.ACCOUNTANT,
        })

        assert response.status_code == status.HTTP_201_CREATED
        created = User.objects.get(email='accountant@example.com')
        assert created.role == UserRole.ACCOUNTANT
        assert created.can_manage_finance

    def test_duplicate_email_rejected(self, admin_client, user):
        """An existing email cannot be provisioned twice."""
        url = reverse('users:create-staff')
        response = admin_client.post(url, {
            'email': user.email,
            'password': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already exists' in response.data['error']

    def test_sales_agent_cannot_create_staff(self, authenticated_client):
        """Non-admin roles are forbidden."""
        url = reverse('users:create-staff')
        response = authenticated_client.post(url, {
            'email': 'someone@example.com',
            'password': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not User.objects.filter(email='someone@example.com').exists()


@pytest.mark.django_db
class TestHealthCheck:
    """Test GET /api/health/"""

    def test_health_check_is_public(self, api_client):
        response = api_client.get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'database': 'ok'}

    def test_plain_http_is_served_under_tests(self, api_client, settings):
        assert settings.SECURE_SSL_REDIRECT is False

        response = api_client.get('/api/health/', secure=False)

        assert response.status_code == status.HTTP_200_OK
