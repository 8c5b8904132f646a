"""Staff account provisioning service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import StaffProvisioningError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def create_staff_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    role: str = UserRole.SALES
) -> User:
    """
    Create a back-office account.

    Staff accounts are provisioned by administrators; there is no
    self-registration.

    Args:
        email: Login email
        password: Initial password (will be hashed)
        display_name: Optional display name
        role: One of UserRole values

    Returns:
        Created User instance

    Raises:
        StaffProvisioningError: If the role is unknown or the email is taken
    """
    if role not in UserRole.values:
        raise StaffProvisioningError(f"Unknown role: {role}")

    if User.objects.filter(email__iexact=email).exists():
        raise StaffProvisioningError("A user with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            role=role,
        )
    except IntegrityError:
        raise StaffProvisioningError("A user with this email already exists")

    logger.info("Provisioned %s account %s", role, user.email)
    return user
