from rest_framework import serializers
from .models import (
    InstallmentStatus,
    PaymentNotification,
    ScheduledInstallment,
)
from .services import Urgency


# =============================================================================
# Input Serializers
# =============================================================================

class InstallmentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for installment filtering.

    Query Parameters:
        booking (UUID): Filter by booking ID
        status (str): Filter by installment status
        due_from (date): Due on or after this date
        due_to (date): Due on or before this date
    """

    booking = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(
        choices=InstallmentStatus.choices,
        required=False
    )
    due_from = serializers.DateField(required=False)
    due_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        due_from = attrs.get('due_from')
        due_to = attrs.get('due_to')

        if due_from and due_to and due_from > due_to:
            raise serializers.ValidationError({
                'due_to': 'End date must be after start date'
            })

        return attrs


class UpcomingFilterSerializer(serializers.Serializer):
    days_ahead = serializers.IntegerField(required=False, min_value=0, max_value=366)


class LinkPaymentInputSerializer(serializers.Serializer):
    """
    Validate input for applying a payment to an installment.

    Fields:
        payment (UUID): Payment to apply
        amount (decimal): Part of the payment to apply, defaults to all of it
    """

    payment = serializers.UUIDField()
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True
    )


# =============================================================================
# Output Serializers
# =============================================================================

class ScheduledInstallmentSerializer(serializers.ModelSerializer):
    """Installment with its payment state. Only ``notes`` is writable."""

    outstanding_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        read_only=True
    )

    class Meta:
        model = ScheduledInstallment
        fields = [
            'id',
            'booking',
            'installment_number',
            'due_date',
            'amount',
            'status',
            'paid_amount',
            'outstanding_amount',
            'paid_date',
            'payment',
            'notification_sent',
            'notification_sent_at',
            'last_notification_type',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'booking',
            'installment_number',
            'due_date',
            'amount',
            'status',
            'paid_amount',
            'paid_date',
            'payment',
            'notification_sent',
            'notification_sent_at',
            'last_notification_type',
            'created_at',
            'updated_at',
        ]


class UpcomingInstallmentSerializer(serializers.Serializer):
    """An open installment with its urgency relative to today."""

    installment = ScheduledInstallmentSerializer()
    days_until_due = serializers.IntegerField()
    urgency = serializers.ChoiceField(choices=Urgency.choices)
    unit_number = serializers.CharField(source='installment.booking.unit.unit_number')
    customer_name = serializers.CharField(source='installment.booking.customer.name')


class UpcomingResponseSerializer(serializers.Serializer):
    days_ahead = serializers.IntegerField()
    count = serializers.IntegerField()
    installments = UpcomingInstallmentSerializer(many=True)


class PaymentNotificationSerializer(serializers.ModelSerializer):

    installment_number = serializers.IntegerField(
        source='scheduled_installment.installment_number',
        read_only=True
    )
    unit_number = serializers.CharField(source='booking.unit.unit_number', read_only=True)
    customer_name = serializers.CharField(source='booking.customer.name', read_only=True)
    # Annotated per user by the notification services
    is_read = serializers.BooleanField(read_only=True, default=False)

    class Meta:
        model = PaymentNotification
        fields = [
            'id',
            'scheduled_installment',
            'installment_number',
            'booking',
            'unit_number',
            'customer_name',
            'notification_type',
            'amount_due',
            'due_date',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields
