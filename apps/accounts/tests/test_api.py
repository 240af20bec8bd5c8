import uuid

import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.accounts.services import register_user, UserRegistrationError


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
            'username': 'newuser',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'tokens' in response.data
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['username'] == 'newuser'
        assert User.objects.filter(username='newuser').exists()

    def test_register_without_display_name(self, api_client):
        """Register without display name (optional field)."""
        url = reverse('users:register')
        data = {
            'username': 'minimal',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(username='minimal').get_display_name() == 'minimal'

    def test_register_duplicate_username(self, api_client, user):
        """Cannot register with an existing username."""
        url = reverse('users:register')
        data = {
            'username': user.username,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already taken' in response.data['error']

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'username': 'mismatch',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'username': 'weak',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_service_rejects_case_variant(self, user):
        """Usernames are unique regardless of case."""
        with pytest.raises(UserRegistrationError):
            register_user(username='TESTUSER', password='SecurePass123!')


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
            'username': user.username,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['uuid'] == str(user.uuid)

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        data = {
            'username': user.username,
            'password': 'WrongPassword123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_nonexistent_user(self, api_client):
        """Login fails for non-existent user."""
        url = reverse('users:login')
        data = {
            'username': 'nobody',
            'password': 'SomePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Login fails for inactive user."""
        url = reverse('users:login')
        data = {
            'username': user_inactive.username,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        """Login updates last_login timestamp."""
        url = reverse('users:login')
        data = {
            'username': user.username,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.last_login is not None


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/ and PATCH /api/auth/user/update/"""

    def test_get_current_user(self, authenticated_client, user):
        """Get current authenticated user profile."""
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == user.username
        assert response.data['display_name'] == user.display_name
        assert 'id' not in response.data

    def test_get_current_user_unauthenticated(self, api_client):
        """Cannot get user profile when not authenticated."""
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_display_name(self, authenticated_client, user):
        """Update user display name."""
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'display_name': 'Updated Name'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.display_name == 'Updated Name'

    def test_cannot_update_username(self, authenticated_client, user):
        """Username is read-only."""
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'username': 'renamed'})

        user.refresh_from_db()
        assert user.username == 'testuser'


# =============================================================================
# User Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestGetUserByToken:
    """Tests for GET /api/auth/users/{uuid}/"""

    def test_get_user_by_token(self, authenticated_client, other_user):
        """Get another user's profile by token."""
        url = reverse('users:user-detail', args=[other_user.uuid])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == other_user.username

    def test_get_user_not_found(self, authenticated_client):
        """Return 404 for unknown token."""
        url = reverse('users:user-detail', args=[uuid.uuid4()])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_user_unauthenticated(self, api_client, user):
        """Cannot get user when not authenticated."""
        url = reverse('users:user-detail', args=[user.uuid])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
