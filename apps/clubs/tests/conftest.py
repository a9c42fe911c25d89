import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.clubs.models import Club, ClubStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def golfer(db):
    """Create and return a golfer who owns the bag under test."""
    return User.objects.create_user(
        email='golfer@example.com',
        password='TestPass123!',
        display_name='Test Golfer',
    )


@pytest.fixture
def other_golfer(db):
    """Create and return a second golfer."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other Golfer',
    )


@pytest.fixture
def golfer_client(api_client, golfer):
    """Return API client authenticated as the golfer."""
    refresh = RefreshToken.for_user(golfer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def make_club(db):
    """Factory for clubs in a golfer's bag."""
    def _make_club(user, club_type, **fields):
        defaults = {
            'brand': 'Titleist',
            'model': 'T200',
            'year': 2021,
            'loft': 30.0,
            'lie': 62.0,
            'length': 37.5,
            'shaft_weight': 110.0,
            'shaft_flex': 'S',
            'shaft_kickpoint': 'mid',
            'shaft_torque': 2.8,
            'shaft_brand': 'True Temper',
            'shaft_model': 'Dynamic Gold',
            'status': ClubStatus.ACTIVE,
        }
        defaults.update(fields)
        return Club.objects.create(user=user, club_type=club_type, **defaults)
    return _make_club


@pytest.fixture
def iron_set(golfer, make_club):
    """5-iron through pitching wedge, plus a driver and a sand wedge."""
    irons = [
        make_club(golfer, club_type)
        for club_type in ['5-iron', '6-iron', '7-iron', '8-iron', '9-iron', 'pw']
    ]
    make_club(golfer, 'driver', brand='TaylorMade', model='Stealth')
    make_club(golfer, 'sw', brand='Vokey', model='SM9')
    return irons
