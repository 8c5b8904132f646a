from decimal import Decimal
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import Unit, UnitStatus, Customer, Booking, BookingStatus, Payment, PaymentType


# =============================================================================
# Input Serializers
# =============================================================================

class UnitFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for unit filtering.

    Query Parameters:
        status (str): Filter by unit status
    """

    status = serializers.ChoiceField(choices=UnitStatus.choices, required=False)


class BookingFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for booking filtering.

    Query Parameters:
        status (str): Filter by booking status
        customer (UUID): Filter by customer ID
        unit (UUID): Filter by unit ID
    """

    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)
    customer = serializers.UUIDField(required=False)
    unit = serializers.UUIDField(required=False)


class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for payment filtering.

    Query Parameters:
        booking (UUID): Filter by booking ID
        payment_type (str): Filter by payment type
        date_from (date): Payments received on or after this date
        date_to (date): Payments received on or before this date
        linked (bool): Only payments applied (or not) to an installment
    """

    booking = serializers.UUIDField(required=False)
    payment_type = serializers.ChoiceField(choices=PaymentType.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    linked = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class BookingCreateSerializer(serializers.Serializer):
    """Input for booking a unit, optionally with a down payment."""

    unit = serializers.UUIDField()
    customer = serializers.UUIDField()
    booking_date = serializers.DateField()
    down_payment = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        min_value=Decimal('0.00')
    )
    payment_type = serializers.ChoiceField(
        choices=PaymentType.choices,
        default=PaymentType.CASH
    )


class PaymentPlanInputSerializer(serializers.Serializer):
    """
    Input for generating a booking's installment schedule.

    Fields:
        plan_years (int): 4 or 5
        frequency_months (int): 1, 2, 3, 4, 5, 6 or 12
        start_date (date): Due date of the first installment
        unit_price (decimal): Price to amortize, defaults to the unit price
    """

    plan_years = serializers.IntegerField()
    frequency_months = serializers.IntegerField()
    start_date = serializers.DateField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class PaymentCreateSerializer(serializers.Serializer):
    """Input for recording a payment, optionally applied to an installment."""

    booking = serializers.UUIDField()
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    payment_date = serializers.DateField()
    payment_type = serializers.ChoiceField(
        choices=PaymentType.choices,
        default=PaymentType.CASH
    )
    receipt_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    scheduled_installment = serializers.UUIDField(required=False, allow_null=True)
    allocated_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True
    )

    def validate(self, attrs):
        if attrs.get('allocated_amount') is not None and not attrs.get('scheduled_installment'):
            raise serializers.ValidationError({
                'allocated_amount': 'Only allowed together with scheduled_installment'
            })
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class UnitSerializer(serializers.ModelSerializer):

    class Meta:
        model = Unit
        fields = [
            'id',
            'unit_number',
            'unit_type',
            'status',
            'price',
            'created_at',
        ]
        read_only_fields = ['id', 'status', 'created_at']


class CustomerSerializer(serializers.ModelSerializer):

    class Meta:
        model = Customer
        fields = ['id', 'name', 'phone', 'email', 'created_at']
        read_only_fields = ['id', 'created_at']


class BookingSerializer(serializers.ModelSerializer):
    """Booking with the cached payment plan."""

    unit_number = serializers.CharField(source='unit.unit_number', read_only=True)
    unit_price = serializers.DecimalField(
        source='unit.price',
        max_digits=12,
        decimal_places=2,
        read_only=True
    )
    customer_name = serializers.CharField(source='customer.name', read_only=True)
    created_by = UserMinimalSerializer(read_only=True)
    has_payment_plan = serializers.BooleanField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id',
            'unit',
            'unit_number',
            'unit_price',
            'customer',
            'customer_name',
            'booking_date',
            'status',
            'payment_plan_years',
            'payment_frequency_months',
            'payment_start_date',
            'monthly_amount',
            'installment_amount',
            'total_installments',
            'has_payment_plan',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'unit',
            'customer',
            'status',
            'payment_plan_years',
            'payment_frequency_months',
            'payment_start_date',
            'monthly_amount',
            'installment_amount',
            'total_installments',
            'created_by',
            'created_at',
            'updated_at',
        ]


class PaymentSerializer(serializers.ModelSerializer):

    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id',
            'booking',
            'amount',
            'payment_date',
            'payment_type',
            'receipt_number',
            'notes',
            'scheduled_installment',
            'allocated_amount',
            'created_by',
            'created_at',
        ]
        read_only_fields = fields
