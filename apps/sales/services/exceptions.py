"""Domain exceptions for sales app."""


class SalesServiceError(Exception):
    """Base exception for all sales service errors."""
    pass


class BookingNotFoundError(SalesServiceError):
    pass


class PaymentNotFoundError(SalesServiceError):
    pass


class InvalidPaymentError(SalesServiceError):
    """Payment amount must be positive."""
    pass


class CustomerNotFoundError(SalesServiceError):
    pass


class UnitNotAvailableError(SalesServiceError):
    """Unit is missing or already booked or sold."""
    pass


class InvalidBookingStateError(SalesServiceError):
    """Operation is not allowed in the booking's current status."""
    pass
