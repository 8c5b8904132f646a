"""Booking management service - booking lifecycle and schedule queries."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.installments.models import ScheduledInstallment
from apps.sales.models import (
    Booking,
    BookingStatus,
    Customer,
    Payment,
    PaymentType,
    Unit,
    UnitStatus,
)
from .exceptions import (
    BookingNotFoundError,
    CustomerNotFoundError,
    InvalidBookingStateError,
    InvalidPaymentError,
    UnitNotAvailableError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_booking(
    *,
    unit_id: UUID,
    customer_id: UUID,
    booking_date: date,
    created_by: Optional[User] = None,
    down_payment: Optional[Decimal] = None,
    payment_type: str = PaymentType.CASH
) -> Booking:
    """
    Book an available unit for a customer.

    This operation:
    1. Locks the unit and checks it is available
    2. Creates the booking and marks the unit booked
    3. Records the down payment, if any, dated on the booking date

    Raises:
        UnitNotAvailableError: If unit doesn't exist or isn't available
        CustomerNotFoundError: If customer doesn't exist
        InvalidPaymentError: If the down payment is negative or above the price
    """
    try:
        unit = Unit.objects.select_for_update().get(id=unit_id)
    except Unit.DoesNotExist:
        raise UnitNotAvailableError(f"Unit {unit_id} not found")

    if unit.status != UnitStatus.AVAILABLE:
        raise UnitNotAvailableError(f"Unit {unit.unit_number} is {unit.status}")

    try:
        customer = Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    if down_payment is not None:
        if down_payment < 0:
            raise InvalidPaymentError("Down payment cannot be negative")
        if down_payment > unit.price:
            raise InvalidPaymentError(
                f"Down payment {down_payment} exceeds the unit price {unit.price}"
            )

    booking = Booking.objects.create(
        unit=unit,
        customer=customer,
        booking_date=booking_date,
        created_by=created_by,
    )

    unit.status = UnitStatus.BOOKED
    unit.save(update_fields=['status', 'updated_at'])

    if down_payment:
        Payment.objects.create(
            booking=booking,
            amount=down_payment,
            payment_date=booking_date,
            payment_type=payment_type,
            notes='Down payment',
            created_by=created_by,
        )

    logger.info("Booked unit %s for customer %s", unit.unit_number, customer.id)
    return booking


@transaction.atomic
def cancel_booking(*, booking_id: UUID) -> Booking:
    """
    Cancel an active booking and release its unit.

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InvalidBookingStateError: If booking is not active
    """
    try:
        booking = Booking.objects.select_for_update().get(id=booking_id)
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    if booking.status != BookingStatus.ACTIVE:
        raise InvalidBookingStateError(f"Booking is already {booking.status}")

    booking.status = BookingStatus.CANCELLED
    booking.save(update_fields=['status', 'updated_at'])

    Unit.objects.filter(id=booking.unit_id).update(status=UnitStatus.AVAILABLE)

    logger.info("Cancelled booking %s", booking.id)
    return booking


def get_booking_schedule(*, booking_id: UUID) -> QuerySet:
    """
    Installments of a booking ordered by number.

    Raises:
        BookingNotFoundError: If booking doesn't exist
    """
    if not Booking.objects.filter(id=booking_id).exists():
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    return (
        ScheduledInstallment.objects
        .filter(booking_id=booking_id)
        .select_related('payment')
        .order_by('installment_number')
    )
