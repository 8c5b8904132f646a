"""Schedule generation service - replaces a booking's installments."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db import transaction

from apps.sales.models import Booking, BookingStatus, Payment
from apps.installments.models import ScheduledInstallment
from .amortization import (
    AmortizationTerms,
    build_schedule,
    calculate_terms,
    validate_plan,
)
from .exceptions import BookingNotFoundError, InvalidBookingStateError

logger = logging.getLogger(__name__)


@dataclass
class GeneratedSchedule:
    booking: Booking
    terms: AmortizationTerms
    installments: list[ScheduledInstallment]


def generate_for_booking(
    *,
    booking_id: UUID,
    unit_price,
    plan_years: int,
    frequency_months: int,
    start_date: date
) -> GeneratedSchedule:
    """
    Replace the installment schedule of a booking.

    This operation:
    1. Validates the plan before touching the database
    2. Locks the booking row and requires it to be active
    3. Deletes the existing installments (linked payments lose their link)
    4. Creates the new installments and caches the plan on the booking

    Steps 2-4 run in a single transaction, so a failure leaves the previous
    schedule in place. Running it twice with the same inputs yields the same
    numbers, dates and amounts.

    Args:
        booking_id: UUID of the booking
        unit_price: Price to amortize
        plan_years: Plan length in years (4 or 5)
        frequency_months: Months between installments (1, 2, 3, 4, 5, 6 or 12)
        start_date: Due date of the first installment

    Returns:
        GeneratedSchedule with the terms and the created installments

    Raises:
        InvalidPaymentPlanError: If the plan is not acceptable
        BookingNotFoundError: If booking doesn't exist
        InvalidBookingStateError: If booking is not active
    """
    validate_plan(
        unit_price=unit_price,
        plan_years=plan_years,
        frequency_months=frequency_months,
        start_date=start_date,
    )
    terms = calculate_terms(
        unit_price=unit_price,
        plan_years=plan_years,
        frequency_months=frequency_months,
    )
    drafts = build_schedule(unit_price=unit_price, terms=terms, start_date=start_date)

    with transaction.atomic():
        try:
            booking = Booking.objects.select_for_update().get(id=booking_id)
        except Booking.DoesNotExist:
            raise BookingNotFoundError(f"Booking {booking_id} not found")

        if booking.status != BookingStatus.ACTIVE:
            raise InvalidBookingStateError(
                f"Cannot change the payment plan of a {booking.status} booking"
            )

        previous = ScheduledInstallment.objects.filter(booking=booking)
        dropped_links = Payment.objects.filter(
            scheduled_installment__in=previous
        ).update(scheduled_installment=None, allocated_amount=Decimal('0.00'))
        if dropped_links:
            logger.warning(
                "Regenerating schedule for booking %s unlinked %d payment(s)",
                booking.id,
                dropped_links,
            )
        previous.delete()

        installments = ScheduledInstallment.objects.bulk_create([
            ScheduledInstallment(
                booking=booking,
                installment_number=draft.installment_number,
                due_date=draft.due_date,
                amount=draft.amount,
            )
            for draft in drafts
        ])

        booking.payment_plan_years = plan_years
        booking.payment_frequency_months = frequency_months
        booking.payment_start_date = start_date
        booking.monthly_amount = terms.monthly_amount
        booking.installment_amount = terms.installment_amount
        booking.total_installments = terms.total_installments
        booking.save(update_fields=[
            'payment_plan_years',
            'payment_frequency_months',
            'payment_start_date',
            'monthly_amount',
            'installment_amount',
            'total_installments',
            'updated_at',
        ])

    logger.info(
        "Generated %d installments for booking %s (%s years, every %s months)",
        len(installments),
        booking.id,
        plan_years,
        frequency_months,
    )

    return GeneratedSchedule(booking=booking, terms=terms, installments=installments)
