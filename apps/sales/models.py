from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class UnitStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    BOOKED = 'booked', 'Booked'
    SOLD = 'sold', 'Sold'


class BookingStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    CANCELLED = 'cancelled', 'Cancelled'
    COMPLETED = 'completed', 'Completed'


class PaymentType(models.TextChoices):
    CASH = 'cash', 'Cash'
    BANK_TRANSFER = 'bank_transfer', 'Bank Transfer'
    CHEQUE = 'cheque', 'Cheque'


class Unit(models.Model):
    """A sellable real-estate unit."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    unit_number = models.CharField(max_length=50, unique=True)
    unit_type = models.CharField(max_length=50, blank=True)
    status = models.CharField(
        max_length=20,
        choices=UnitStatus.choices,
        default=UnitStatus.AVAILABLE
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'units'
        ordering = ['unit_number']

    def __str__(self):
        return f"Unit {self.unit_number}"


class Customer(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customers'
        ordering = ['name']

    def __str__(self):
        return self.name


class Booking(models.Model):
    """
    A customer's purchase agreement for a unit.

    The payment plan fields are written by schedule generation and cache
    the terms the current installment schedule was built from.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    unit = models.ForeignKey(
        Unit,
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    booking_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.ACTIVE
    )

    # Payment plan (cached from the last schedule generation)
    payment_plan_years = models.PositiveSmallIntegerField(null=True, blank=True)
    payment_frequency_months = models.PositiveSmallIntegerField(null=True, blank=True)
    payment_start_date = models.DateField(null=True, blank=True)
    monthly_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    installment_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    total_installments = models.PositiveIntegerField(null=True, blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings_created'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bookings'
        indexes = [
            models.Index(fields=['status', 'booking_date'], name='bookings_status_date_idx'),
        ]
        ordering = ['-booking_date', '-created_at']

    def __str__(self):
        return f"{self.unit.unit_number} - {self.customer.name}"

    @property
    def has_payment_plan(self):
        return self.total_installments is not None


class Payment(models.Model):
    """
    Money actually received against a booking.

    A payment may be applied to one scheduled installment; the applied part
    is kept in ``allocated_amount`` so installment balances can be rebuilt
    from the payments still linked to them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name='payments'
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payment_date = models.DateField()
    payment_type = models.CharField(
        max_length=20,
        choices=PaymentType.choices,
        default=PaymentType.CASH
    )
    receipt_number = models.CharField(max_length=64, blank=True)
    notes = models.TextField(blank=True)

    # Reconciliation
    scheduled_installment = models.ForeignKey(
        'installments.ScheduledInstallment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='linked_payments'
    )
    allocated_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments_recorded'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['booking', 'payment_date'], name='payments_booking_date_idx'),
        ]
        ordering = ['-payment_date', '-created_at']

    def __str__(self):
        return f"{self.amount} on {self.payment_date} ({self.booking_id})"
