"""Payment notification service - due-date sweep and read tracking."""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Exists, OuterRef, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.installments.models import (
    InstallmentStatus,
    NotificationRead,
    NotificationType,
    PaymentNotification,
    ScheduledInstallment,
)
from .exceptions import NotificationNotFoundError

logger = logging.getLogger(__name__)


def notification_type_for(due_date: date, *, today: date) -> str:
    if due_date < today:
        return NotificationType.OVERDUE
    if due_date == today:
        return NotificationType.DUE_TODAY
    return NotificationType.REMINDER


def find_notification_candidates(
    *,
    today: Optional[date] = None,
    lead_days: Optional[int] = None
) -> QuerySet:
    """
    Unpaid installments due within ``lead_days`` whose current stage was not notified yet.

    The stages run reminder, due today, overdue. An installment already
    reminded is picked up again on its due date and once more when it is late.
    """
    if lead_days is None:
        lead_days = settings.INSTALLMENT_REMINDER_DAYS
    today = today or timezone.localdate()

    stage_not_notified = (
        Q(due_date__lt=today) & ~Q(last_notification_type=NotificationType.OVERDUE)
    ) | (
        Q(due_date=today) & ~Q(last_notification_type=NotificationType.DUE_TODAY)
    ) | (
        Q(due_date__gt=today) & Q(last_notification_type='')
    )

    return ScheduledInstallment.objects.filter(
        stage_not_notified,
        status__in=[InstallmentStatus.PENDING, InstallmentStatus.OVERDUE],
        due_date__lte=today + timedelta(days=lead_days),
    ).order_by('due_date')


@transaction.atomic
def check_and_create_notifications(
    *,
    today: Optional[date] = None,
    lead_days: Optional[int] = None
) -> int:
    """
    Raise one notification per installment reaching a new stage.

    Each installment is notified at most once per stage; the stage is stored
    in the same transaction that creates the notification.

    Returns:
        Number of notifications created
    """
    today = today or timezone.localdate()
    candidates = list(
        find_notification_candidates(today=today, lead_days=lead_days).select_for_update()
    )

    if not candidates:
        return 0

    ids_by_type = defaultdict(list)
    notifications = []
    for installment in candidates:
        notification_type = notification_type_for(installment.due_date, today=today)
        ids_by_type[notification_type].append(installment.id)
        notifications.append(PaymentNotification(
            scheduled_installment=installment,
            booking_id=installment.booking_id,
            notification_type=notification_type,
            amount_due=installment.outstanding_amount,
            due_date=installment.due_date,
        ))
    PaymentNotification.objects.bulk_create(notifications)

    sent_at = timezone.now()
    for notification_type, ids in ids_by_type.items():
        ScheduledInstallment.objects.filter(id__in=ids).update(
            notification_sent=True,
            notification_sent_at=sent_at,
            last_notification_type=notification_type,
        )

    logger.info("Created %d payment notification(s)", len(candidates))
    return len(candidates)


def mark_overdue_installments(*, today: Optional[date] = None) -> int:
    """Move pending installments past their due date to overdue."""
    today = today or timezone.localdate()

    updated = ScheduledInstallment.objects.filter(
        status=InstallmentStatus.PENDING,
        due_date__lt=today,
    ).update(status=InstallmentStatus.OVERDUE, updated_at=timezone.now())

    if updated:
        logger.info("Marked %d installment(s) overdue", updated)
    return updated


def _visible_to(user: User) -> QuerySet:
    return PaymentNotification.objects.filter(Q(user=user) | Q(user__isnull=True))


def _with_read_state(queryset: QuerySet, user: User) -> QuerySet:
    return queryset.annotate(
        is_read=Exists(
            NotificationRead.objects.filter(notification=OuterRef('pk'), user=user)
        )
    )


def get_unread_notifications(*, user: User) -> QuerySet:
    """Notifications addressed to ``user`` or to everyone that ``user`` has not read."""
    return (
        _with_read_state(_visible_to(user), user)
        .filter(is_read=False)
        .select_related(
            'scheduled_installment',
            'booking__unit',
            'booking__customer',
        )
        .order_by('-created_at')
    )


def mark_notification_read(*, notification_id: UUID, user: User) -> PaymentNotification:
    """
    Mark one notification as read for ``user`` only.

    Notifications addressed to another user are reported as not found.
    """
    try:
        notification = _visible_to(user).get(id=notification_id)
    except PaymentNotification.DoesNotExist:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")

    NotificationRead.objects.get_or_create(notification=notification, user=user)
    notification.is_read = True
    return notification


@transaction.atomic
def mark_all_notifications_read(*, user: User) -> int:
    unread_ids = list(
        _visible_to(user).exclude(reads__user=user).values_list('id', flat=True)
    )
    NotificationRead.objects.bulk_create(
        [NotificationRead(notification_id=notification_id, user=user) for notification_id in unread_ids],
        ignore_conflicts=True,
    )
    return len(unread_ids)
