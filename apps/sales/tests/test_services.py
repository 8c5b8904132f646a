"""
Service layer tests for the sales app.

Covers booking lifecycle, payment recording with installment links and
payment deletion.
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4
from django.core.management import call_command

from apps.sales.models import Booking, BookingStatus, Payment, Unit, UnitStatus
from apps.sales.services import (
    create_booking,
    cancel_booking,
    get_booking_schedule,
    record_payment,
    delete_payment,
)
from apps.sales.services.exceptions import (
    BookingNotFoundError,
    CustomerNotFoundError,
    InvalidBookingStateError,
    InvalidPaymentError,
    PaymentNotFoundError,
    UnitNotAvailableError,
)
from apps.installments.models import InstallmentStatus, ScheduledInstallment
from apps.installments.services.exceptions import OverpaymentError


# ============================================================================
# BOOKING TESTS
# ============================================================================

@pytest.mark.django_db
class TestBookingLifecycle:

    def test_create_booking_marks_unit_booked(self, available_unit, customer, accountant):
        booking = create_booking(
            unit_id=available_unit.id,
            customer_id=customer.id,
            booking_date=date(2024, 1, 1),
            created_by=accountant,
        )

        assert booking.status == BookingStatus.ACTIVE
        assert booking.created_by == accountant
        available_unit.refresh_from_db()
        assert available_unit.status == UnitStatus.BOOKED
        assert not booking.payments.exists()

    def test_down_payment_is_recorded(self, available_unit, customer):
        booking = create_booking(
            unit_id=available_unit.id,
            customer_id=customer.id,
            booking_date=date(2024, 1, 1),
            down_payment=Decimal('10000.00'),
        )

        payment = booking.payments.get()
        assert payment.amount == Decimal('10000.00')
        assert payment.payment_date == date(2024, 1, 1)
        assert payment.scheduled_installment is None

    def test_booked_unit_cannot_be_booked_again(self, available_unit, customer):
        create_booking(unit_id=available_unit.id, customer_id=customer.id, booking_date=date(2024, 1, 1))

        with pytest.raises(UnitNotAvailableError):
            create_booking(unit_id=available_unit.id, customer_id=customer.id, booking_date=date(2024, 1, 2))

        assert Booking.objects.count() == 1

    def test_down_payment_above_price(self, available_unit, customer):
        with pytest.raises(InvalidPaymentError):
            create_booking(
                unit_id=available_unit.id,
                customer_id=customer.id,
                booking_date=date(2024, 1, 1),
                down_payment=Decimal('120000.01'),
            )

        available_unit.refresh_from_db()
        assert available_unit.status == UnitStatus.AVAILABLE

    def test_unknown_customer(self, available_unit):
        with pytest.raises(CustomerNotFoundError):
            create_booking(unit_id=available_unit.id, customer_id=uuid4(), booking_date=date(2024, 1, 1))

    def test_cancel_releases_unit(self, booking):
        cancelled = cancel_booking(booking_id=booking.id)

        assert cancelled.status == BookingStatus.CANCELLED
        assert Unit.objects.get(id=booking.unit_id).status == UnitStatus.AVAILABLE

    def test_cancel_twice(self, booking):
        cancel_booking(booking_id=booking.id)

        with pytest.raises(InvalidBookingStateError):
            cancel_booking(booking_id=booking.id)

    def test_schedule_is_ordered(self, scheduled_booking):
        numbers = [i.installment_number for i in get_booking_schedule(booking_id=scheduled_booking.id)]
        assert numbers == list(range(1, 17))

    def test_schedule_of_unknown_booking(self, db):
        with pytest.raises(BookingNotFoundError):
            get_booking_schedule(booking_id=uuid4())


# ============================================================================
# PAYMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestRecordPayment:

    def test_unlinked_payment(self, booking, accountant):
        payment = record_payment(
            booking_id=booking.id,
            amount=Decimal('2000.00'),
            payment_date=date(2024, 1, 3),
            payment_type='bank_transfer',
            created_by=accountant,
            receipt_number='R-001',
        )

        assert payment.booking_id == booking.id
        assert payment.receipt_number == 'R-001'
        assert payment.scheduled_installment is None

    def test_linked_payment(self, scheduled_booking, first_installment, accountant):
        payment = record_payment(
            booking_id=scheduled_booking.id,
            amount=Decimal('7500.00'),
            payment_date=date(2024, 1, 3),
            payment_type='cash',
            created_by=accountant,
            scheduled_installment_id=first_installment.id,
        )

        assert payment.scheduled_installment_id == first_installment.id
        assert payment.allocated_amount == Decimal('7500.00')
        first_installment.refresh_from_db()
        assert first_installment.status == InstallmentStatus.PAID

    def test_rejected_link_leaves_no_payment(self, scheduled_booking, first_installment, accountant):
        with pytest.raises(OverpaymentError):
            record_payment(
                booking_id=scheduled_booking.id,
                amount=Decimal('9000.00'),
                payment_date=date(2024, 1, 3),
                payment_type='cash',
                created_by=accountant,
                scheduled_installment_id=first_installment.id,
            )

        assert Payment.objects.count() == 0

    def test_non_positive_amount(self, booking, accountant):
        with pytest.raises(InvalidPaymentError):
            record_payment(
                booking_id=booking.id,
                amount=Decimal('0'),
                payment_date=date(2024, 1, 3),
                payment_type='cash',
                created_by=accountant,
            )

    def test_unknown_booking(self, db):
        with pytest.raises(BookingNotFoundError):
            record_payment(
                booking_id=uuid4(),
                amount=Decimal('10.00'),
                payment_date=date(2024, 1, 3),
                payment_type='cash',
                created_by=None,
            )


@pytest.mark.django_db
class TestDeletePayment:

    def test_delete_linked_payment_resets_installment(self, scheduled_booking, first_installment):
        payment = record_payment(
            booking_id=scheduled_booking.id,
            amount=Decimal('7500.00'),
            payment_date=date(2024, 1, 3),
            scheduled_installment_id=first_installment.id,
        )

        delete_payment(payment_id=payment.id)

        assert not Payment.objects.filter(id=payment.id).exists()
        first_installment.refresh_from_db()
        assert first_installment.paid_amount == Decimal('0.00')
        assert first_installment.payment is None
        assert first_installment.status in (InstallmentStatus.PENDING, InstallmentStatus.OVERDUE)

    def test_unknown_payment(self, db):
        with pytest.raises(PaymentNotFoundError):
            delete_payment(payment_id=uuid4())


@pytest.mark.django_db
class TestSampleDataCommand:

    def test_creates_consistent_schedules(self):
        call_command('create_sample_data')

        assert Booking.objects.count() == 4
        for booking in Booking.objects.all():
            installments = ScheduledInstallment.objects.filter(booking=booking)
            assert installments.count() == booking.total_installments
            assert sum(i.amount for i in installments) == booking.unit.price
        assert ScheduledInstallment.objects.filter(status=InstallmentStatus.PAID).count() == 14
        assert ScheduledInstallment.objects.filter(status=InstallmentStatus.PARTIALLY_PAID).count() == 3

    def test_rerun_with_clear(self):
        call_command('create_sample_data')
        call_command('create_sample_data', '--clear')

        assert Booking.objects.count() == 4
        assert Unit.objects.count() == 8
