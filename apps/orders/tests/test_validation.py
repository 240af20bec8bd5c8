"""
Order validator tests.

The validator only reads through its catalog, so these tests run against
an in-memory catalog and never touch the database.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest

from apps.orders.services import (
    OrderValidator,
    OrderRequest,
    OrderItemRequest,
    FulfillmentDetails,
    MerchantNotFoundError,
    NotGroupMemberError,
    InvalidScheduleError,
    InvalidFulfillmentMethodError,
    DishNotFoundError,
    InvalidQuantityError,
    MixedMerchantError,
    InsufficientFundsError,
)


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


class InMemoryCatalog:
    def __init__(self):
        self.dishes = {}
        self.memberships = {}

    def add_membership(self, pk, user_id, group_id, credits=0, merchant_name='Store'):
        membership = SimpleNamespace(
            pk=pk, uuid=uuid4(), user_id=user_id, group_id=group_id,
            credits=credits, merchant_name=merchant_name,
        )
        self.memberships[str(membership.uuid)] = membership
        return membership

    def add_dish(self, membership, name, price):
        dish = SimpleNamespace(uuid=uuid4(), name=name, price=price, membership_id=membership.pk)
        self.dishes[str(dish.uuid)] = dish
        return dish

    def dish_by_uuid(self, token):
        return self.dishes.get(str(token))

    def membership_by_token(self, token):
        return self.memberships.get(str(token))

    def membership_of(self, user_id, group_id):
        for membership in self.memberships.values():
            if membership.user_id == user_id and membership.group_id == group_id:
                return membership
        return None


@pytest.fixture
def catalog():
    catalog = InMemoryCatalog()
    catalog.seller = catalog.add_membership(pk=1, user_id=10, group_id=100, merchant_name="Sam's Store")
    catalog.buyer = catalog.add_membership(pk=2, user_id=20, group_id=100, credits=500)
    catalog.other_seller = catalog.add_membership(pk=3, user_id=30, group_id=100)
    catalog.dumplings = catalog.add_dish(catalog.seller, 'Dumplings', 200)
    catalog.tea = catalog.add_dish(catalog.seller, 'Jasmine Tea', 50)
    catalog.borscht = catalog.add_dish(catalog.other_seller, 'Borscht', 120)
    return catalog


@pytest.fixture
def validator(catalog):
    return OrderValidator(catalog, clock=lambda: NOW)


@pytest.fixture
def caller():
    return SimpleNamespace(pk=20)


def make_request(catalog, **overrides):
    fields = {
        'seller_membership_token': str(catalog.seller.uuid),
        'items': (
            OrderItemRequest(dish_token=str(catalog.dumplings.uuid), quantity=2),
            OrderItemRequest(dish_token=str(catalog.tea.uuid), quantity=1),
        ),
    }
    fields.update(overrides)
    return OrderRequest(**fields)


# =============================================================================
# Accepted Orders
# =============================================================================

class TestValidOrders:
    """Orders that pass every check."""

    def test_prices_cart_from_catalog(self, validator, catalog, caller):
        validated = validator.validate(caller=caller, order_request=make_request(catalog))

        assert validated.total == 450
        assert validated.seller_membership is catalog.seller
        assert validated.buyer_membership is catalog.buyer
        assert [item.price for item in validated.items] == [200, 50]
        assert validated.items[0].snapshot()['dish_name'] == 'Dumplings'

    def test_defaults_to_asap_dine_in(self, validator, catalog, caller):
        validated = validator.validate(caller=caller, order_request=make_request(catalog))

        assert validated.fulfillment_schedule_type == 'asap'
        assert validated.fulfillment_date is None
        assert validated.fulfillment_method == 'dine_in'
        assert validated.fulfillment_details['address'] is None

    def test_total_equal_to_balance_is_accepted(self, validator, catalog, caller):
        items = (OrderItemRequest(dish_token=str(catalog.dumplings.uuid), quantity=2),
                 OrderItemRequest(dish_token=str(catalog.tea.uuid), quantity=2))

        validated = validator.validate(caller=caller, order_request=make_request(catalog, items=items))

        assert validated.total == 500

    def test_zero_quantity_is_accepted(self, validator, catalog, caller):
        items = (OrderItemRequest(dish_token=str(catalog.dumplings.uuid), quantity=0),)

        validated = validator.validate(caller=caller, order_request=make_request(catalog, items=items))

        assert validated.total == 0

    def test_choices_are_case_insensitive(self, validator, catalog, caller):
        request = make_request(
            catalog,
            fulfillment_schedule_type='SCHEDULED',
            fulfillment_date='2026-03-02T18:00:00+00:00',
            fulfillment_method='Delivery',
            fulfillment_details=FulfillmentDetails(address='1 Main St', city='Brno'),
        )

        validated = validator.validate(caller=caller, order_request=request)

        assert validated.fulfillment_schedule_type == 'scheduled'
        assert validated.fulfillment_method == 'delivery'
        assert validated.fulfillment_date == datetime(2026, 3, 2, 18, 0, tzinfo=dt_timezone.utc)
        assert validated.fulfillment_details['city'] == 'Brno'

    def test_naive_date_is_made_aware(self, validator, catalog, caller):
        request = make_request(
            catalog,
            fulfillment_schedule_type='scheduled',
            fulfillment_date='2026-04-01T09:30:00',
        )

        validated = validator.validate(caller=caller, order_request=request)

        assert validated.fulfillment_date.tzinfo is not None


# =============================================================================
# Rejections
# =============================================================================

class TestRejections:
    """Each check in isolation, with its exact message."""

    def test_unknown_merchant(self, validator, catalog, caller):
        request = make_request(catalog, seller_membership_token=str(uuid4()))

        with pytest.raises(MerchantNotFoundError, match="Merchant does not exist"):
            validator.validate(caller=caller, order_request=request)

    def test_caller_outside_group(self, validator, catalog):
        with pytest.raises(NotGroupMemberError, match="User is not a member of the merchant's group"):
            validator.validate(caller=SimpleNamespace(pk=99), order_request=make_request(catalog))

    def test_invalid_schedule_type(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_schedule_type='tomorrow')

        with pytest.raises(InvalidScheduleError):
            validator.validate(caller=caller, order_request=request)

    def test_asap_with_date(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_date='2026-03-02T18:00:00+00:00')

        with pytest.raises(InvalidScheduleError, match="must be null for ASAP orders"):
            validator.validate(caller=caller, order_request=request)

    def test_scheduled_without_date(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_schedule_type='scheduled')

        with pytest.raises(InvalidScheduleError, match="must not be null for scheduled orders"):
            validator.validate(caller=caller, order_request=request)

    def test_scheduled_with_unparseable_date(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_schedule_type='scheduled', fulfillment_date='next friday')

        with pytest.raises(InvalidScheduleError, match="ISO-8601"):
            validator.validate(caller=caller, order_request=request)

    def test_scheduled_in_the_past(self, validator, catalog, caller):
        request = make_request(
            catalog,
            fulfillment_schedule_type='scheduled',
            fulfillment_date='2026-02-28T12:00:00+00:00',
        )

        with pytest.raises(InvalidScheduleError, match="must be in the future"):
            validator.validate(caller=caller, order_request=request)

    def test_scheduled_exactly_now_is_not_future(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_schedule_type='scheduled', fulfillment_date=NOW.isoformat())

        with pytest.raises(InvalidScheduleError, match="must be in the future"):
            validator.validate(caller=caller, order_request=request)

    def test_invalid_fulfillment_method(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_method='drone')

        with pytest.raises(InvalidFulfillmentMethodError, match="Invalid fulfillment method"):
            validator.validate(caller=caller, order_request=request)

    def test_unknown_dish(self, validator, catalog, caller):
        token = str(uuid4())
        items = (OrderItemRequest(dish_token=token, quantity=1),)

        with pytest.raises(DishNotFoundError, match=f"Dish {token} does not exist"):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))

    def test_negative_quantity(self, validator, catalog, caller):
        token = str(catalog.tea.uuid)
        items = (OrderItemRequest(dish_token=token, quantity=-1),)

        with pytest.raises(InvalidQuantityError, match=f"Dish {token} has invalid quantity"):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))

    def test_dish_from_another_merchant(self, validator, catalog, caller):
        items = (OrderItemRequest(dish_token=str(catalog.dumplings.uuid), quantity=1),
                 OrderItemRequest(dish_token=str(catalog.borscht.uuid), quantity=1))

        with pytest.raises(MixedMerchantError, match="All dishes must be from the same merchant"):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))

    def test_insufficient_funds(self, validator, catalog, caller):
        catalog.buyer.credits = 400

        with pytest.raises(InsufficientFundsError, match="Insufficient funds"):
            validator.validate(caller=caller, order_request=make_request(catalog))


# =============================================================================
# Check Ordering
# =============================================================================

class TestFirstFailureWins:
    """When several checks fail, the earliest one is reported."""

    def test_membership_before_schedule(self, validator, catalog):
        request = make_request(catalog, fulfillment_schedule_type='bogus', fulfillment_method='drone')

        with pytest.raises(NotGroupMemberError):
            validator.validate(caller=SimpleNamespace(pk=99), order_request=request)

    def test_schedule_before_method(self, validator, catalog, caller):
        request = make_request(catalog, fulfillment_schedule_type='bogus', fulfillment_method='drone')

        with pytest.raises(InvalidScheduleError):
            validator.validate(caller=caller, order_request=request)

    def test_missing_dish_before_mixed_merchant(self, validator, catalog, caller):
        items = (OrderItemRequest(dish_token=str(catalog.borscht.uuid), quantity=1),
                 OrderItemRequest(dish_token=str(uuid4()), quantity=1))

        with pytest.raises(DishNotFoundError):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))

    def test_mixed_merchant_before_funds(self, validator, catalog, caller):
        catalog.buyer.credits = 0
        items = (OrderItemRequest(dish_token=str(catalog.borscht.uuid), quantity=1),)

        with pytest.raises(MixedMerchantError):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))

    def test_first_bad_item_is_reported(self, validator, catalog, caller):
        first = str(uuid4())
        items = (OrderItemRequest(dish_token=first, quantity=1),
                 OrderItemRequest(dish_token=str(catalog.tea.uuid), quantity=-5))

        with pytest.raises(DishNotFoundError, match=first):
            validator.validate(caller=caller, order_request=make_request(catalog, items=items))
