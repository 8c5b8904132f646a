"""Payment recording service - stores received money and keeps links consistent."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.installments.services import link_payment, unlink_payment
from apps.sales.models import Booking, Payment, PaymentType
from .exceptions import (
    BookingNotFoundError,
    InvalidPaymentError,
    PaymentNotFoundError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def record_payment(
    *,
    booking_id: UUID,
    amount: Decimal,
    payment_date: date,
    payment_type: str = PaymentType.CASH,
    created_by: Optional[User] = None,
    receipt_number: str = '',
    notes: str = '',
    scheduled_installment_id: Optional[UUID] = None,
    allocated_amount: Optional[Decimal] = None
) -> Payment:
    """
    Record money received against a booking.

    When ``scheduled_installment_id`` is given the payment is applied to
    that installment in the same transaction; a rejected link leaves no
    payment behind.

    Args:
        booking_id: UUID of the booking paid against
        amount: Amount received
        payment_date: Date the money was received
        payment_type: cash, bank_transfer or cheque
        created_by: Staff member recording the payment
        receipt_number: Optional receipt reference
        notes: Optional free text
        scheduled_installment_id: Installment to apply the payment to
        allocated_amount: Part of the payment to apply (defaults to all of it)

    Returns:
        Created Payment instance

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InvalidPaymentError: If amount is not positive
        InstallmentsServiceError: If linking to the installment is rejected
    """
    if amount is None or amount <= 0:
        raise InvalidPaymentError("Payment amount must be greater than zero")

    try:
        booking = Booking.objects.get(id=booking_id)
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    payment = Payment.objects.create(
        booking=booking,
        amount=amount,
        payment_date=payment_date,
        payment_type=payment_type,
        receipt_number=receipt_number,
        notes=notes,
        created_by=created_by,
    )

    logger.info("Recorded payment %s of %s for booking %s", payment.id, amount, booking.id)

    if scheduled_installment_id:
        link_payment(
            installment_id=scheduled_installment_id,
            payment_id=payment.id,
            amount=allocated_amount,
        )
        payment.refresh_from_db()

    return payment


@transaction.atomic
def delete_payment(*, payment_id: UUID) -> None:
    """
    Delete a payment after withdrawing it from any installment.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    if not Payment.objects.filter(id=payment_id).exists():
        raise PaymentNotFoundError(f"Payment {payment_id} not found")

    unlink_payment(payment_id=payment_id)
    Payment.objects.filter(id=payment_id).delete()

    logger.info("Deleted payment %s", payment_id)
