import uuid

import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, FAVORITE_CLUB_PREFERENCE


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestTokenObtain:
    """Tests for POST /api/auth/token/"""

    def test_obtain_token_success(self, api_client, user):
        """Valid credentials return an access/refresh pair."""
        url = reverse('users:token-obtain')
        response = api_client.post(url, {
            'email': 'golfer@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_obtain_token_wrong_password(self, api_client, user):
        """Wrong password is rejected."""
        url = reverse('users:token-obtain')
        response = api_client.post(url, {
            'email': 'golfer@example.com',
            'password': 'WrongPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_obtain_token_inactive_user(self, api_client, user_inactive):
        """Inactive golfers cannot log in."""
        url = reverse('users:token-obtain')
        response = api_client.post(url, {
            'email': 'inactive@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token(self, api_client, user):
        """Refresh token returns a new access token."""
        obtain = api_client.post(reverse('users:token-obtain'), {
            'email': 'golfer@example.com',
            'password': 'TestPass123!',
        })
        url = reverse('users:token-refresh')
        response = api_client.post(url, {'refresh': obtain.data['refresh']})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['favorite_club_id'] is None

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Favorite Club Preference Tests
# =============================================================================

@pytest.mark.django_db
class TestFavoriteClubPreference:
    """Tests for User.favorite_club_id / set_favorite_club."""

    def test_no_favorite_by_default(self, user):
        assert user.favorite_club_id is None

    def test_set_and_clear_favorite(self, user):
        club = type('StubClub', (), {'id': uuid.uuid4()})()

        user.set_favorite_club(club)
        user.refresh_from_db()
        assert user.favorite_club_id == str(club.id)

        user.set_favorite_club(None)
        user.refresh_from_db()
        assert user.favorite_club_id is None

    def test_other_preferences_kept(self, user):
        user.preferences = {'units': 'yards'}
        user.save()
        club = type('StubClub', (), {'id': uuid.uuid4()})()

        user.set_favorite_club(club)
        user.refresh_from_db()

        assert user.preferences['units'] == 'yards'
        assert user.preferences[FAVORITE_CLUB_PREFERENCE] == str(club.id)

    def test_create_user_requires_email(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='TestPass123!')


# =============================================================================
# Health Check Tests
# =============================================================================

@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_plain_http_is_served(self, api_client):
        """Requests over plain HTTP are answered, not redirected to HTTPS."""
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}

    def test_ssl_redirect_off_under_tests(self, settings):
        assert settings.SECURE_SSL_REDIRECT is False
