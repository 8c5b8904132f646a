"""
Sales services - Business logic layer.

This package contains the business operations for the sales app:
- Payment recording and deletion
- Booking lifecycle (create, cancel) and schedule queries
"""

from .payment_recording import (
    record_payment,
    delete_payment,
)

from .bookings import (
    create_booking,
    cancel_booking,
    get_booking_schedule,
)

# Domain Exceptions
from .exceptions import (
    SalesServiceError,
    BookingNotFoundError,
    PaymentNotFoundError,
    InvalidPaymentError,
    CustomerNotFoundError,
    UnitNotAvailableError,
    InvalidBookingStateError,
)

__all__ = [
    # Payment Recording Services
    'record_payment',
    'delete_payment',
    # Booking Services
    'create_booking',
    'cancel_booking',
    'get_booking_schedule',
    # Exceptions
    'SalesServiceError',
    'BookingNotFoundError',
    'PaymentNotFoundError',
    'InvalidPaymentError',
    'CustomerNotFoundError',
    'UnitNotAvailableError',
    'InvalidBookingStateError',
]
