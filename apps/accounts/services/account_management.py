"""Account management service - profile reads and updates."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from uuid import UUID
from typing import Optional

from .exceptions import (
    UserNotFoundError,
    UserRegistrationError,
    ProfileUpdateForbiddenError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

_UNSET = object()


def get_user_by_id(*, user_id: UUID) -> User:
    """
    Retrieve an active user by ID.

    Raises:
        UserNotFoundError: If user doesn't exist or is deactivated
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")


@transaction.atomic
def update_user_profile(
    *,
    user_id: UUID,
    acting_user: User,
    username: Optional[str] = None,
    email: Optional[str] = None,
    profile_picture=_UNSET,
) -> User:
    """
    Update a user's public profile.

    Users may only edit their own profile; admins may edit anyone's.

    Args:
        user_id: UUID of the profile being edited
        acting_user: Authenticated user making the change
        username: New handle
        email: New email address
        profile_picture: New avatar URL (None clears it)

    Returns:
        Updated User instance

    Raises:
        ProfileUpdateForbiddenError: If acting user is neither owner nor admin
        UserNotFoundError: If user doesn't exist
        UserRegistrationError: If username or email is taken by someone else
    """
    if str(acting_user.id) != str(user_id) and not acting_user.is_staff:
        raise ProfileUpdateForbiddenError("Access denied")

    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    others = User.objects.exclude(id=user.id)
    if username and others.filter(username=username).exists():
        raise UserRegistrationError("Username already taken")
    if email:
        email = User.normalize_email_address(email)
        if others.filter(email=email).exists():
            raise UserRegistrationError("Email already registered")

    if username:
        user.username = username
    if email:
        user.email = email
    if profile_picture is not _UNSET:
        user.profile_picture = profile_picture or None

    try:
        user.save()
    except IntegrityError:
        raise UserRegistrationError("Username or email already registered")

    logger.info("User %s updated profile of %s", acting_user.id, user.id)
    return user
