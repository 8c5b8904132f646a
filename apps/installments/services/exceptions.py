"""Domain exceptions for installments app."""


class InstallmentsServiceError(Exception):
    """Base exception for all installments service errors."""
    pass


class InvalidPaymentPlanError(InstallmentsServiceError):
    """Plan years, frequency, price or start date is not acceptable."""
    pass


class InvalidPaymentAmountError(InstallmentsServiceError):
    """Amount applied to an installment must be positive."""
    pass


class OverpaymentError(InstallmentsServiceError):
    """Amount exceeds what is still outstanding on the installment."""
    pass


class PaymentAlreadyLinkedError(InstallmentsServiceError):
    """Payment is already applied to an installment."""
    pass


class BookingNotFoundError(InstallmentsServiceError):
    pass


class InstallmentNotFoundError(InstallmentsServiceError):
    pass


class PaymentNotFoundError(InstallmentsServiceError):
    pass


class NotificationNotFoundError(InstallmentsServiceError):
    pass


class BookingMismatchError(InstallmentsServiceError):
    """Payment and installment belong to different bookings."""
    pass


class InvalidBookingStateError(InstallmentsServiceError):
    """Booking is cancelled or completed."""
    pass
