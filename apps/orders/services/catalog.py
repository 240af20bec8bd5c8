"""
Read access to the reference data an order is validated against.

The validator only talks to an object with these three methods, so tests
can hand it an in-memory stand-in.
"""

import functools
from typing import Optional
from uuid import UUID

from django.db import InterfaceError, OperationalError

from apps.dishes.models import Dish
from apps.merchant_groups.models import GroupMembership
from apps.merchant_groups.services import (
    resolve_buyer_membership,
    resolve_seller_membership,
    MembershipNotFoundError,
)

from .exceptions import CatalogUnavailableError


def _translate_db_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            raise CatalogUnavailableError("Catalog is temporarily unavailable") from exc
    return wrapper


class DjangoCatalog:
    """Catalog backed by the ORM. Returns None for anything not found."""

    @_translate_db_errors
    def dish_by_uuid(self, token) -> Optional[Dish]:
        try:
            dish_uuid = token if isinstance(token, UUID) else UUID(str(token))
        except (TypeError, ValueError):
            return None
        return (
            Dish.objects
            .select_related('membership')
            .filter(uuid=dish_uuid)
            .first()
        )

    @_translate_db_errors
    def membership_by_token(self, token) -> Optional[GroupMembership]:
        try:
            return resolve_seller_membership(token=token)
        except MembershipNotFoundError:
            return None

    @_translate_db_errors
    def membership_of(self, user_id: int, group_id: int) -> Optional[GroupMembership]:
        try:
            return resolve_buyer_membership(user_id=user_id, group_id=group_id)
        except MembershipNotFoundError:
            return None
