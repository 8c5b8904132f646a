from django.contrib import admin
from .models import Unit, Customer, Booking, Payment


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ['unit_number', 'unit_type', 'status', 'price']
    list_filter = ['status', 'unit_type']
    search_fields = ['unit_number']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'email', 'created_at']
    search_fields = ['name', 'phone', 'email']


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    fields = ['amount', 'payment_date', 'payment_type', 'receipt_number', 'scheduled_installment', 'allocated_amount']
    readonly_fields = ['scheduled_installment', 'allocated_amount']


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Admin for bookings. Payment plans are generated through the API."""

    list_display = [
        'unit',
        'customer',
        'booking_date',
        'status',
        'payment_plan_years',
        'payment_frequency_months',
        'total_installments',
    ]
    list_filter = ['status', 'payment_plan_years', 'payment_frequency_months']
    search_fields = ['unit__unit_number', 'customer__name']
    readonly_fields = [
        'payment_plan_years',
        'payment_frequency_months',
        'payment_start_date',
        'monthly_amount',
        'installment_amount',
        'total_installments',
        'created_at',
        'updated_at',
    ]
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['booking', 'amount', 'payment_date', 'payment_type', 'scheduled_installment']
    list_filter = ['payment_type', 'payment_date']
    search_fields = ['receipt_number', 'booking__customer__name']
    readonly_fields = ['scheduled_installment', 'allocated_amount', 'created_at', 'updated_at']
