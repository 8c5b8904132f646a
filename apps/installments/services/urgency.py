"""Urgency classification for installments that still expect money."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.installments.models import OPEN_STATUSES, ScheduledInstallment


class Urgency(models.TextChoices):
    OVERDUE = 'overdue', 'Overdue'
    TODAY = 'today', 'Due Today'
    SOON = 'soon', 'Due Soon'
    SCHEDULED = 'scheduled', 'Scheduled'


@dataclass
class UpcomingInstallment:
    installment: ScheduledInstallment
    days_until_due: int
    urgency: Urgency


def classify_urgency(due_date: date, *, today: date, soon_days: Optional[int] = None) -> Urgency:
    """
    Bucket a due date relative to ``today``.

    Overdue before today, today on the day, soon within ``soon_days``
    (INSTALLMENT_SOON_DAYS, 7 by default), scheduled after that.
    """
    if soon_days is None:
        soon_days = settings.INSTALLMENT_SOON_DAYS

    days_until_due = (due_date - today).days

    if days_until_due < 0:
        return Urgency.OVERDUE
    if days_until_due == 0:
        return Urgency.TODAY
    if days_until_due <= soon_days:
        return Urgency.SOON
    return Urgency.SCHEDULED


def get_upcoming_installments(
    *,
    days_ahead: Optional[int] = None,
    today: Optional[date] = None
) -> list[UpcomingInstallment]:
    """
    Open installments due on or before ``today + days_ahead``, earliest first.

    Overdue installments are always included since their due date is in the
    past. Urgency is computed on the fly and never stored.
    """
    if days_ahead is None:
        days_ahead = settings.INSTALLMENT_UPCOMING_DAYS
    today = today or timezone.localdate()

    installments = (
        ScheduledInstallment.objects
        .filter(
            status__in=OPEN_STATUSES,
            due_date__lte=today + timedelta(days=days_ahead),
        )
        .select_related('booking__unit', 'booking__customer')
        .order_by('due_date', 'installment_number')
    )

    return [
        UpcomingInstallment(
            installment=installment,
            days_until_due=(installment.due_date - today).days,
            urgency=classify_urgency(installment.due_date, today=today),
        )
        for installment in installments
    ]
