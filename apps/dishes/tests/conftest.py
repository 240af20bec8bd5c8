import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.merchant_groups.models import MerchantGroup, GroupMembership
from apps.dishes.models import Dish, DishPicture


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def seller(db):
    """User who lists dishes."""
    return User.objects.create_user(
        username='seller',
        password='testpass123',
        display_name='Sam',
    )


@pytest.fixture
def buyer(db):
    """Another member of the seller's group."""
    return User.objects.create_user(
        username='buyer',
        password='testpass123',
        display_name='Bea',
    )


@pytest.fixture
def outsider(db):
    """User with no membership in the seller's group."""
    return User.objects.create_user(
        username='outsider',
        password='testpass123',
        display_name='Oz',
    )


@pytest.fixture
def kitchen(db, seller):
    """Group shared by seller and buyer."""
    return MerchantGroup.objects.create(name='Kitchen', owner=seller)


@pytest.fixture
def seller_membership(kitchen, seller):
    return GroupMembership.objects.create(user=seller, group=kitchen, merchant_name="Sam's Store")


@pytest.fixture
def buyer_membership(kitchen, buyer):
    return GroupMembership.objects.create(user=buyer, group=kitchen, merchant_name="Bea's Store", credits=500)


@pytest.fixture
def outsider_membership(db, outsider):
    """Outsider's membership in an unrelated group."""
    elsewhere = MerchantGroup.objects.create(name='Elsewhere', owner=outsider)
    return GroupMembership.objects.create(user=outsider, group=elsewhere, merchant_name="Oz's Store")


@pytest.fixture
def dish(seller, seller_membership):
    """Published dish listed by the seller."""
    return Dish.objects.create(
        owner=seller,
        membership=seller_membership,
        name='Dumplings',
        short_description='Pork and chive',
        price=200,
        spiciness_level=1.5,
        is_published=True,
    )


@pytest.fixture
def draft_dish(seller, seller_membership):
    """Unpublished dish listed by the seller."""
    return Dish.objects.create(
        owner=seller,
        membership=seller_membership,
        name='Secret Curry',
        price=350,
    )


@pytest.fixture
def dish_with_pictures(dish):
    for position, ref in enumerate(['img/a.png', 'img/b.png', 'img/c.png']):
        DishPicture.objects.create(dish=dish, image_reference=ref, position=position)
    return dish


@pytest.fixture
def seller_client(api_client, seller):
    api_client.force_authenticate(user=seller)
    return api_client


@pytest.fixture
def buyer_client(api_client, buyer, buyer_membership):
    api_client.force_authenticate(user=buyer)
    return api_client


@pytest.fixture
def outsider_client(api_client, outsider, outsider_membership):
    api_client.force_authenticate(user=outsider)
    return api_client
