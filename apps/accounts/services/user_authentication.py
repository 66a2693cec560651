"""Email + password login for the API."""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate_user(*, email: str, password: str) -> User:
    """
    Resolve a login attempt to an active user.

    Emails are matched case-insensitively through the same normalization
    used on save. The wrong-email and wrong-password cases share one
    message so the response does not reveal which accounts exist.

    Returns:
        The user, with last_login stamped

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Password matched but the account is deactivated
    """
    user = User.objects.filter(email=User.normalize_email_address(email)).first()

    if user is None:
        # Hash anyway so unknown emails take as long as wrong passwords
        User().set_password(password)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.check_password(password):
        logger.info("Failed login for user %s", user.id)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    # Single-column UPDATE; no row lock needed
    user.last_login = timezone.now()
    User.objects.filter(pk=user.pk).update(last_login=user.last_login)

    return user
