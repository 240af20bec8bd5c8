"""Service layer tests for dishes: access evaluation and dish management."""

from uuid import uuid4

import pytest

from apps.dishes.models import Dish, DishPicture
from apps.dishes.services import (
    DishPermission,
    dish_permission,
    create_dish,
    get_dish,
    list_dishes_for_membership,
    list_visible_dishes,
    update_dish,
    remove_dish,
    add_dish_picture,
    remove_dish_picture,
)
from apps.dishes.services.exceptions import (
    DishNotFoundError,
    DishPermissionDeniedError,
    InvalidDishDataError,
    PictureNotFoundError,
)


# =============================================================================
# Permission Evaluation Tests
# =============================================================================

@pytest.mark.django_db
class TestDishPermission:
    """Tests for dish_permission()."""

    def test_owner_gets_read_write(self, dish, seller):
        assert dish_permission(user_id=seller.pk, dish=dish) == DishPermission.READ_WRITE

    def test_group_member_gets_read(self, dish, buyer, buyer_membership):
        assert dish_permission(user_id=buyer.pk, dish=dish) == DishPermission.READ

    def test_outsider_gets_none(self, dish, outsider, outsider_membership):
        assert dish_permission(user_id=outsider.pk, dish=dish) == DishPermission.NONE

    def test_user_without_memberships_gets_none(self, dish, outsider):
        assert dish_permission(user_id=outsider.pk, dish=dish) == DishPermission.NONE

    def test_predicates(self):
        assert DishPermission.READ_WRITE.has_edit_permissions()
        assert DishPermission.READ_WRITE.has_view_permissions()
        assert not DishPermission.READ.has_edit_permissions()
        assert DishPermission.READ.has_view_permissions()
        assert not DishPermission.NONE.has_edit_permissions()
        assert not DishPermission.NONE.has_view_permissions()


# =============================================================================
# Dish Management Tests
# =============================================================================

@pytest.mark.django_db
class TestDishManagement:
    """Tests for dish_management.py service functions."""

    def test_create_dish(self, seller, seller_membership):
        dish = create_dish(
            user=seller,
            membership_token=seller_membership.uuid,
            name='Bao',
            price=150,
        )

        assert dish.membership == seller_membership
        assert dish.owner == seller
        assert dish.is_published is False

    def test_create_dish_under_someone_elses_membership(self, buyer, seller_membership):
        with pytest.raises(DishPermissionDeniedError):
            create_dish(user=buyer, membership_token=seller_membership.uuid, name='Stolen', price=1)

    def test_create_dish_unknown_membership(self, seller):
        with pytest.raises(DishPermissionDeniedError):
            create_dish(user=seller, membership_token=uuid4(), name='Ghost', price=1)

    def test_create_dish_negative_price(self, seller, seller_membership):
        with pytest.raises(InvalidDishDataError):
            create_dish(user=seller, membership_token=seller_membership.uuid, name='Refund', price=-1)

    def test_get_dish_as_member(self, dish, buyer, buyer_membership):
        assert get_dish(dish_uuid=dish.uuid, user=buyer) == dish

    def test_get_dish_as_outsider(self, dish, outsider):
        with pytest.raises(DishPermissionDeniedError):
            get_dish(dish_uuid=dish.uuid, user=outsider)

    def test_get_missing_dish(self, seller):
        with pytest.raises(DishNotFoundError):
            get_dish(dish_uuid=uuid4(), user=seller)

    def test_list_for_membership_hides_drafts_from_buyers(self, dish, draft_dish, buyer, buyer_membership, seller_membership):
        dishes = list_dishes_for_membership(membership_token=seller_membership.uuid, user=buyer)
        assert list(dishes) == [dish]

    def test_list_for_membership_shows_drafts_to_seller(self, dish, draft_dish, seller, seller_membership):
        dishes = list_dishes_for_membership(membership_token=seller_membership.uuid, user=seller)
        assert set(dishes) == {dish, draft_dish}

    def test_list_for_membership_outsider(self, dish, outsider, seller_membership):
        with pytest.raises(DishPermissionDeniedError):
            list_dishes_for_membership(membership_token=seller_membership.uuid, user=outsider)

    def test_list_visible_dishes(self, dish, draft_dish, buyer, buyer_membership, outsider, outsider_membership):
        assert list(list_visible_dishes(user=buyer)) == [dish]
        assert list(list_visible_dishes(user=outsider)) == []

    def test_update_dish(self, dish, seller):
        updated = update_dish(dish_uuid=dish.uuid, user=seller, price=250, is_published=False)

        assert updated.price == 250
        assert updated.is_published is False
        assert updated.name == 'Dumplings'

    def test_update_dish_by_member(self, dish, buyer, buyer_membership):
        with pytest.raises(DishPermissionDeniedError):
            update_dish(dish_uuid=dish.uuid, user=buyer, price=1)

    def test_update_dish_negative_spiciness(self, dish, seller):
        with pytest.raises(InvalidDishDataError):
            update_dish(dish_uuid=dish.uuid, user=seller, spiciness_level=-2.0)

    def test_remove_dish(self, dish, seller):
        remove_dish(dish_uuid=dish.uuid, user=seller)
        assert not Dish.objects.filter(pk=dish.pk).exists()

    def test_remove_dish_by_member(self, dish, buyer, buyer_membership):
        with pytest.raises(DishPermissionDeniedError):
            remove_dish(dish_uuid=dish.uuid, user=buyer)


# =============================================================================
# Picture Tests
# =============================================================================

@pytest.mark.django_db
class TestDishPictures:
    """Tests for picture ordering."""

    def test_add_picture_appends(self, dish_with_pictures, seller):
        picture = add_dish_picture(dish_uuid=dish_with_pictures.uuid, user=seller, image_reference='img/d.png')
        assert picture.position == 3

    def test_first_picture_at_zero(self, dish, seller):
        picture = add_dish_picture(dish_uuid=dish.uuid, user=seller, image_reference='img/first.png')
        assert picture.position == 0

    def test_add_blank_reference(self, dish, seller):
        with pytest.raises(InvalidDishDataError):
            add_dish_picture(dish_uuid=dish.uuid, user=seller, image_reference='   ')

    def test_remove_picture_closes_gap(self, dish_with_pictures, seller):
        remove_dish_picture(dish_uuid=dish_with_pictures.uuid, user=seller, index=1)

        remaining = list(
            DishPicture.objects.filter(dish=dish_with_pictures).values_list('position', 'image_reference')
        )
        assert remaining == [(0, 'img/a.png'), (1, 'img/c.png')]

    def test_remove_picture_out_of_range(self, dish_with_pictures, seller):
        with pytest.raises(PictureNotFoundError):
            remove_dish_picture(dish_uuid=dish_with_pictures.uuid, user=seller, index=3)

    def test_remove_picture_by_member(self, dish_with_pictures, buyer, buyer_membership):
        with pytest.raises(DishPermissionDeniedError):
            remove_dish_picture(dish_uuid=dish_with_pictures.uuid, user=buyer, index=0)
