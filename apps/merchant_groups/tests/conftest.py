import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.merchant_groups.models import MerchantGroup, GroupMembership


def client_for(user):
    """Return an API client authenticated as the given user."""
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
    """Create and return a test user (group owner)."""
    return User.objects.create_user(
        username='owner',
        password='TestPass123!',
        display_name='Olga',
    )


@pytest.fixture
def member_user(db):
    """Create and return a member user."""
    return User.objects.create_user(
        username='member',
        password='TestPass123!',
        display_name='Milan',
    )


@pytest.fixture
def group_other_user(db):
    """Create and return a user not in any group."""
    return User.objects.create_user(
        username='other',
        password='TestPass123!',
        display_name='Otto',
    )


@pytest.fixture
def authenticated_client(group_owner):
    """Return API client authenticated as group owner."""
    return client_for(group_owner)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as group member."""
    return client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    """Return API client authenticated as non-member user."""
    return client_for(group_other_user)


@pytest.fixture
def group(db, group_owner):
    """Create and return a private group with owner membership."""
    group = MerchantGroup.objects.create(
        name='Floor 3 Kitchen',
        description='Lunch swaps on the third floor',
        is_public=False,
        owner=group_owner,
        default_credit_amount=100,
    )
    GroupMembership.objects.create(
        user=group_owner,
        group=group,
        merchant_name="Olga's Store",
        credits=100,
    )
    return group


@pytest.fixture
def group_with_member(group, member_user):
    """Private group with owner and one member."""
    GroupMembership.objects.create(
        user=member_user,
        group=group,
        merchant_name="Milan's Store",
        credits=100,
    )
    return group


@pytest.fixture
def public_group(db, group_owner):
    """Create and return a public group."""
    group = MerchantGroup.objects.create(
        name='Open Kitchen',
        description='A public group',
        is_public=True,
        owner=group_owner,
    )
    GroupMembership.objects.create(
        user=group_owner,
        group=group,
        merchant_name="Olga's Store",
    )
    return group
