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
    email: str,
    password: str,
) -> User:
    """
    Register a new user.

    Args:
        username: Public handle (unique)
        email: User's email address (unique, case-insensitive)
        password: User's password (will be hashed)

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If username or email is already taken
    """
    email = User.normalize_email_address(email)

    if User.objects.filter(email=email).exists():
        raise UserRegistrationError("Email already registered")
    if User.objects.filter(username=username).exists():
        raise UserRegistrationError("Username already taken")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            username=username,
        )
    except IntegrityError:
        # Concurrent registration won the unique constraint
        raise UserRegistrationError("Username or email already registered")

    logger.info("Registered user %s", user.id)
    return user
