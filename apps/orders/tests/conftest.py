import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.merchant_groups.models import MerchantGroup, GroupMembership
from apps.dishes.models import Dish
from apps.orders.models import Order, FulfillmentMethod


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def seller(db):
    """User who sells dishes."""
    return User.objects.create_user(username='seller', password='testpass123', display_name='Sam')


@pytest.fixture
def buyer(db):
    """User who orders from the seller."""
    return User.objects.create_user(username='buyer', password='testpass123', display_name='Bea')


@pytest.fixture
def second_seller(db):
    """Another seller in the same group."""
    return User.objects.create_user(username='cook', password='testpass123', display_name='Cy')


@pytest.fixture
def outsider(db):
    """User with no membership in the kitchen group."""
    return User.objects.create_user(username='outsider', password='testpass123', display_name='Oz')


@pytest.fixture
def kitchen(db, seller):
    return MerchantGroup.objects.create(name='Kitchen', owner=seller, default_credit_amount=500)


@pytest.fixture
def seller_membership(kitchen, seller):
    return GroupMembership.objects.create(user=seller, group=kitchen, merchant_name="Sam's Store", credits=500)


@pytest.fixture
def buyer_membership(kitchen, buyer):
    return GroupMembership.objects.create(user=buyer, group=kitchen, merchant_name="Bea's Store", credits=500)


@pytest.fixture
def second_seller_membership(kitchen, second_seller):
    return GroupMembership.objects.create(user=second_seller, group=kitchen, merchant_name="Cy's Store")


@pytest.fixture
def outsider_membership(db, outsider):
    elsewhere = MerchantGroup.objects.create(name='Elsewhere', owner=outsider)
    return GroupMembership.objects.create(user=outsider, group=elsewhere, merchant_name="Oz's Store", credits=500)


@pytest.fixture
def dumplings(seller, seller_membership):
    return Dish.objects.create(
        owner=seller, membership=seller_membership, name='Dumplings', price=200, is_published=True,
    )


@pytest.fixture
def tea(seller, seller_membership):
    return Dish.objects.create(
        owner=seller, membership=seller_membership, name='Jasmine Tea', price=50, is_published=True,
    )


@pytest.fixture
def foreign_dish(second_seller, second_seller_membership):
    """Dish sold by a different member of the same group."""
    return Dish.objects.create(
        owner=second_seller, membership=second_seller_membership, name='Borscht', price=120,
    )


@pytest.fixture
def cart_payload(seller_membership, dumplings, tea):
    """Cart worth 450: two dumplings and one tea."""
    return {
        'seller_membership_token': str(seller_membership.uuid),
        'special_instructions': 'Ring twice',
        'fulfillment_schedule_type': 'asap',
        'fulfillment_date': None,
        'fulfillment_method': 'pickup',
        'items': [
            {'dish_token': str(dumplings.uuid), 'quantity': 2, 'special_instructions': 'Extra chili'},
            {'dish_token': str(tea.uuid), 'quantity': 1},
        ],
    }


@pytest.fixture
def placed_order(buyer, buyer_membership, seller, seller_membership, kitchen, dumplings):
    """Pending order created directly, bypassing the pipeline."""
    return Order.objects.create(
        request_token='7f3c8a52-1d4e-4b6a-9c2f-0e5d6a7b8c9d',
        buyer=buyer,
        buyer_membership=buyer_membership,
        seller=seller,
        seller_membership=seller_membership,
        group=kitchen,
        order_total=200,
        fulfillment_method=FulfillmentMethod.PICKUP,
        items=[{
            'dish_token': str(dumplings.uuid),
            'dish_name': 'Dumplings',
            'quantity': 1,
            'special_instructions': '',
            'price': 200,
        }],
    )


@pytest.fixture
def seller_client(api_client, seller, seller_membership):
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
