"""
Management command to sweep installments for due dates.

Moves pending installments past their due date to overdue and raises a
payment notification for every unpaid installment entering the reminder
window. Meant to run once a day from cron.

Usage:
    python manage.py check_installments
    python manage.py check_installments --dry-run --lead-days 7
"""

import logging
from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.installments.models import InstallmentStatus, ScheduledInstallment
from apps.installments.services import (
    check_and_create_notifications,
    find_notification_candidates,
    mark_overdue_installments,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Mark overdue installments and create payment notifications'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )
        parser.add_argument(
            '--lead-days',
            type=int,
            default=settings.INSTALLMENT_REMINDER_DAYS,
            help='Notify installments due within this many days',
        )
        parser.add_argument(
            '--date',
            help='Run as of this date (YYYY-MM-DD) instead of today',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        lead_days = options['lead_days']

        if lead_days < 0:
            raise CommandError('--lead-days cannot be negative')

        if options['date']:
            try:
                today = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError(f"Invalid date: {options['date']}")
        else:
            today = timezone.localdate()

        if dry_run:
            overdue = ScheduledInstallment.objects.filter(
                status=InstallmentStatus.PENDING,
                due_date__lt=today,
            ).count()
            candidates = find_notification_candidates(today=today, lead_days=lead_days)

            self.stdout.write(f'{overdue} installment(s) would be marked overdue')
            self.stdout.write(f'{candidates.count()} notification(s) would be created:')
            for installment in candidates.select_related('booking__unit'):
                self.stdout.write(
                    f'  - {installment.booking.unit.unit_number} #{installment.installment_number} '
                    f'| {installment.amount} | Due: {installment.due_date}'
                )
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        overdue = mark_overdue_installments(today=today)
        created = check_and_create_notifications(today=today, lead_days=lead_days)

        logger.info(
            "Installment sweep for %s: %d overdue, %d notifications",
            today,
            overdue,
            created,
        )
        self.stdout.write(
            self.style.SUCCESS(
                f'Marked {overdue} installment(s) overdue, created {created} notification(s)'
            )
        )
