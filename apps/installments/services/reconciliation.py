"""Reconciliation service - applies payments to scheduled installments."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.sales.models import Payment
from apps.installments.models import InstallmentStatus, ScheduledInstallment
from .amortization import round2
from .exceptions import (
    BookingMismatchError,
    InstallmentNotFoundError,
    InvalidPaymentAmountError,
    OverpaymentError,
    PaymentAlreadyLinkedError,
    PaymentNotFoundError,
)

logger = logging.getLogger(__name__)


def _settled_status(installment: ScheduledInstallment) -> str:
    if installment.paid_amount >= installment.amount:
        return InstallmentStatus.PAID
    return InstallmentStatus.PARTIALLY_PAID


@transaction.atomic
def link_payment(
    *,
    installment_id: UUID,
    payment_id: UUID,
    amount: Optional[Decimal] = None,
    today: Optional[date] = None
) -> ScheduledInstallment:
    """
    Apply a payment (or part of it) to an installment.

    Both rows are locked for the duration of the update, so concurrent links
    against the same installment are serialized. A payment can be applied to
    one installment only.

    Args:
        installment_id: UUID of the installment being paid
        payment_id: UUID of the payment received
        amount: Amount to apply; defaults to the whole payment
        today: Date recorded as ``paid_date``; defaults to the local date

    Returns:
        Updated ScheduledInstallment

    Raises:
        InstallmentNotFoundError: If installment doesn't exist
        PaymentNotFoundError: If payment doesn't exist
        PaymentAlreadyLinkedError: If the payment is already applied
        BookingMismatchError: If the payment belongs to another booking
        InvalidPaymentAmountError: If amount is not positive or exceeds
            the payment
        OverpaymentError: If amount exceeds the outstanding balance
    """
    today = today or timezone.localdate()

    try:
        installment = ScheduledInstallment.objects.select_for_update().get(id=installment_id)
    except ScheduledInstallment.DoesNotExist:
        raise InstallmentNotFoundError(f"Installment {installment_id} not found")

    try:
        payment = Payment.objects.select_for_update().get(id=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment {payment_id} not found")

    if (
        payment.scheduled_installment_id is not None
        or ScheduledInstallment.objects.filter(payment=payment).exists()
    ):
        raise PaymentAlreadyLinkedError(
            f"Payment {payment.id} is already linked to an installment"
        )

    if payment.booking_id != installment.booking_id:
        raise BookingMismatchError(
            "Payment and installment belong to different bookings"
        )

    amount = payment.amount if amount is None else round2(amount)

    if amount <= 0:
        raise InvalidPaymentAmountError("Amount must be greater than zero")
    if amount > payment.amount:
        raise InvalidPaymentAmountError(
            f"Amount {amount} exceeds the payment of {payment.amount}"
        )

    outstanding = installment.outstanding_amount
    if amount > outstanding:
        raise OverpaymentError(
            f"Amount {amount} exceeds the outstanding {outstanding} "
            f"on installment #{installment.installment_number}"
        )

    installment.paid_amount += amount
    installment.status = _settled_status(installment)
    installment.paid_date = today
    installment.payment = payment
    installment.save(update_fields=['paid_amount', 'status', 'paid_date', 'payment', 'updated_at'])

    payment.scheduled_installment = installment
    payment.allocated_amount = amount
    payment.save(update_fields=['scheduled_installment', 'allocated_amount', 'updated_at'])

    logger.info(
        "Linked payment %s (%s) to installment #%d of booking %s, status %s",
        payment.id,
        amount,
        installment.installment_number,
        installment.booking_id,
        installment.status,
    )

    return installment


def _recompute_from_links(installment: ScheduledInstallment, *, today: date) -> None:
    """Rebuild paid state from the payments still linked to the installment."""
    remaining = Payment.objects.filter(
        scheduled_installment=installment
    ).order_by('-payment_date', '-created_at')

    total = remaining.aggregate(total=Sum('allocated_amount'))['total']

    if not total:
        installment.paid_amount = Decimal('0.00')
        installment.paid_date = None
        installment.payment = None
        if installment.due_date < today:
            installment.status = InstallmentStatus.OVERDUE
        else:
            installment.status = InstallmentStatus.PENDING
    else:
        installment.paid_amount = min(total, installment.amount)
        installment.status = _settled_status(installment)
        installment.paid_date = today
        installment.payment = remaining.first()

    installment.save(update_fields=['paid_amount', 'status', 'paid_date', 'payment', 'updated_at'])


@transaction.atomic
def unlink_payment(*, payment_id: UUID, today: Optional[date] = None) -> int:
    """
    Withdraw a payment from the installments it was applied to.

    Affected installments are those naming the payment as their latest
    payment plus the one the payment itself points at. Each is recomputed
    from its remaining payments: with none left it returns to ``pending``
    (or ``overdue`` when past due).

    Returns:
        Number of installments updated

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    today = today or timezone.localdate()

    try:
        payment = Payment.objects.get(id=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment {payment_id} not found")

    affected_ids = set(
        ScheduledInstallment.objects.filter(payment=payment).values_list('id', flat=True)
    )
    if payment.scheduled_installment_id:
        affected_ids.add(payment.scheduled_installment_id)

    # Installments are locked before the payment, same order as link_payment
    installments = list(
        ScheduledInstallment.objects
        .select_for_update()
        .filter(id__in=affected_ids)
        .order_by('id')
    )
    payment = Payment.objects.select_for_update().get(id=payment_id)

    payment.scheduled_installment = None
    payment.allocated_amount = Decimal('0.00')
    payment.save(update_fields=['scheduled_installment', 'allocated_amount', 'updated_at'])

    for installment in installments:
        _recompute_from_links(installment, today=today)

    if installments:
        logger.info(
            "Unlinked payment %s from %d installment(s)",
            payment.id,
            len(installments),
        )

    return len(installments)
