from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class InstallmentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PARTIALLY_PAID = 'partially_paid', 'Partially Paid'
    PAID = 'paid', 'Paid'
    OVERDUE = 'overdue', 'Overdue'


# Statuses that still expect money
OPEN_STATUSES = (
    InstallmentStatus.PENDING,
    InstallmentStatus.OVERDUE,
    InstallmentStatus.PARTIALLY_PAID,
)


class NotificationType(models.TextChoices):
    REMINDER = 'reminder', 'Reminder'
    DUE_TODAY = 'due_today', 'Due Today'
    OVERDUE = 'overdue', 'Overdue'


class ScheduledInstallment(models.Model):
    """
    One dated, numbered slice of a booking's price.

    Rows are produced by schedule generation and replaced wholesale when the
    payment plan is regenerated. ``paid_amount`` is kept between zero and
    ``amount`` by the reconciliation services.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    booking = models.ForeignKey(
        'sales.Booking',
        on_delete=models.CASCADE,
        related_name='installments'
    )
    installment_number = models.PositiveIntegerField()
    due_date = models.DateField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    status = models.CharField(
        max_length=20,
        choices=InstallmentStatus.choices,
        default=InstallmentStatus.PENDING
    )
    paid_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    paid_date = models.DateField(null=True, blank=True)

    # Most recent payment applied to this installment
    payment = models.ForeignKey(
        'sales.Payment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='settled_installments'
    )

    notification_sent = models.BooleanField(default=False)
    notification_sent_at = models.DateTimeField(null=True, blank=True)
    # Stage of the latest notification; a later stage raises a new one
    last_notification_type = models.CharField(
        max_length=20,
        choices=NotificationType.choices,
        blank=True
    )
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'scheduled_installments'
        constraints = [
            models.UniqueConstraint(
                fields=['booking', 'installment_number'],
                name='unique_installment_number_per_booking'
            ),
        ]
        indexes = [
            models.Index(fields=['due_date', 'status'], name='installments_due_status_idx'),
        ]
        ordering = ['booking', 'installment_number']

    def __str__(self):
        return f"#{self.installment_number} of {self.booking_id} due {self.due_date}"

    @property
    def outstanding_amount(self):
        return self.amount - self.paid_amount


class PaymentNotification(models.Model):
    """Alert raised for an installment that is due soon, today, or overdue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    scheduled_installment = models.ForeignKey(
        ScheduledInstallment,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    booking = models.ForeignKey(
        'sales.Booking',
        on_delete=models.CASCADE,
        related_name='payment_notifications'
    )
    notification_type = models.CharField(
        max_length=20,
        choices=NotificationType.choices
    )
    amount_due = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateField()

    # Null means the notification is visible to every staff member
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='payment_notifications'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payment_notifications'
        indexes = [
            models.Index(fields=['created_at'], name='notifications_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_notification_type_display()} for {self.scheduled_installment}"


class NotificationRead(models.Model):
    """Records that one staff member has read one notification."""

    notification = models.ForeignKey(
        PaymentNotification,
        on_delete=models.CASCADE,
        related_name='reads'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notification_reads'
    )
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payment_notification_reads'
        constraints = [
            models.UniqueConstraint(
                fields=['notification', 'user'],
                name='unique_notification_read_per_user'
            ),
        ]

    def __str__(self):
        return f"{self.user} read {self.notification_id}"
