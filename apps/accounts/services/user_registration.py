"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    username: str,
    password: str,
    display_name: str = "",
    email: str = ""
) -> User:
    """
    Register a new user.

    Args:
        username: Unique login name
        password: User's password (will be hashed)
        display_name: Optional display name
        email: Optional contact email

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username is taken
    """
    if User.objects.filter(username__iexact=username).exists():
        raise UserRegistrationError(f"Username '{username}' is already taken")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                password=password,
                display_name=display_name,
                email=email,
            )
    except IntegrityError:
        raise UserRegistrationError(f"Username '{username}' is already taken")

    logger.info("Registered user %s", user.uuid)
    return user
