"""
Installments services - Business logic layer.

This package contains all business operations for the installments app:
- Payment plan arithmetic
- Schedule generation
- Payment reconciliation
- Urgency classification
- Payment notifications
"""

from .amortization import (
    AmortizationTerms,
    InstallmentDraft,
    build_schedule,
    calculate_terms,
    round2,
    validate_plan,
)

from .schedule_generation import (
    GeneratedSchedule,
    generate_for_booking,
)

from .reconciliation import (
    link_payment,
    unlink_payment,
)

from .urgency import (
    Urgency,
    UpcomingInstallment,
    classify_urgency,
    get_upcoming_installments,
)

from .notifications import (
    check_and_create_notifications,
    find_notification_candidates,
    get_unread_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_overdue_installments,
)

# Domain Exceptions
from .exceptions import (
    InstallmentsServiceError,
    InvalidPaymentPlanError,
    InvalidPaymentAmountError,
    OverpaymentError,
    PaymentAlreadyLinkedError,
    BookingMismatchError,
    InvalidBookingStateError,
    BookingNotFoundError,
    InstallmentNotFoundError,
    PaymentNotFoundError,
    NotificationNotFoundError,
)

__all__ = [
    # Amortization
    'AmortizationTerms',
    'InstallmentDraft',
    'build_schedule',
    'calculate_terms',
    'round2',
    'validate_plan',
    # Schedule Generation
    'GeneratedSchedule',
    'generate_for_booking',
    # Reconciliation
    'link_payment',
    'unlink_payment',
    # Urgency
    'Urgency',
    'UpcomingInstallment',
    'classify_urgency',
    'get_upcoming_installments',
    # Notifications
    'check_and_create_notifications',
    'find_notification_candidates',
    'get_unread_notifications',
    'mark_all_notifications_read',
    'mark_notification_read',
    'mark_overdue_installments',
    # Exceptions
    'InstallmentsServiceError',
    'InvalidPaymentPlanError',
    'InvalidPaymentAmountError',
    'OverpaymentError',
    'PaymentAlreadyLinkedError',
    'BookingMismatchError',
    'InvalidBookingStateError',
    'BookingNotFoundError',
    'InstallmentNotFoundError',
    'PaymentNotFoundError',
    'NotificationNotFoundError',
]
