"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    StaffProvisioningError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .staff_provisioning import create_staff_user
from .user_authentication import authenticate_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'StaffProvisioningError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'create_staff_user',
    'authenticate_user',
]
