"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    ProfileUpdateForbiddenError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import get_user_by_id, update_user_profile

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'ProfileUpdateForbiddenError',
    # Services
    'register_user',
    'authenticate_user',
    'get_user_by_id',
    'update_user_profile',
]
