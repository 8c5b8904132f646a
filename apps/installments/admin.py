from django.contrib import admin
from .models import ScheduledInstallment, PaymentNotification, NotificationRead


@admin.register(ScheduledInstallment)
class ScheduledInstallmentAdmin(admin.ModelAdmin):
    list_display = [
        'booking',
        'installment_number',
        'due_date',
        'amount',
        'paid_amount',
        'status',
        'notification_sent',
    ]
    list_filter = ['status', 'notification_sent', 'due_date']
    search_fields = ['booking__unit__unit_number', 'booking__customer__name']
    ordering = ['due_date']
    # Payment state is owned by the reconciliation services
    readonly_fields = [
        'booking',
        'installment_number',
        'due_date',
        'amount',
        'paid_amount',
        'paid_date',
        'payment',
        'status',
        'notification_sent_at',
        'last_notification_type',
        'created_at',
        'updated_at',
    ]


@admin.register(PaymentNotification)
class PaymentNotificationAdmin(admin.ModelAdmin):
    list_display = ['scheduled_installment', 'notification_type', 'amount_due', 'due_date', 'user', 'created_at']
    list_filter = ['notification_type']


@admin.register(NotificationRead)
class NotificationReadAdmin(admin.ModelAdmin):
    list_display = ['notification', 'user', 'read_at']
    list_filter = ['user']
