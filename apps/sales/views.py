from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.accounts.permissions import IsFinanceStaffOrReadOnly
from apps.installments.serializers import ScheduledInstallmentSerializer
from apps.installments.services import (
    generate_for_booking,
    unlink_payment,
    InstallmentsServiceError,
)
from .models import Unit, Customer, Booking, Payment
from .serializers import (
    UnitSerializer,
    CustomerSerializer,
    BookingSerializer,
    BookingCreateSerializer,
    BookingFilterSerializer,
    UnitFilterSerializer,
    PaymentSerializer,
    PaymentCreateSerializer,
    PaymentFilterSerializer,
    PaymentPlanInputSerializer,
)
from .services import (
    create_booking,
    cancel_booking,
    get_booking_schedule,
    record_payment,
    delete_payment,
    SalesServiceError,
    BookingNotFoundError,
    PaymentNotFoundError,
)


# Response serializers for API documentation
class PaymentPlanResponseSerializer(drf_serializers.Serializer):
    booking = BookingSerializer()
    installments = ScheduledInstallmentSerializer(many=True)


class UnlinkResponseSerializer(drf_serializers.Serializer):
    installments_updated = drf_serializers.IntegerField()
    payment = PaymentSerializer()


class SalesPagination(PageNumberPagination):
    """Custom pagination for sales records."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class UnitViewSet(viewsets.ModelViewSet):
    """
    ViewSet for units.

    Unit status is driven by bookings and cannot be edited directly.
    """

    queryset = Unit.objects.all()
    serializer_class = UnitSerializer
    permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    pagination_class = SalesPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_queryset(self):
        queryset = super().get_queryset()

        filter_serializer = UnitFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])

        return queryset


class CustomerViewSet(viewsets.ModelViewSet):

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    pagination_class = SalesPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']


class BookingViewSet(viewsets.ModelViewSet):
    """
    ViewSet for bookings.

    list: Get bookings (filterable by status, customer, unit)
    create: Book a unit for a customer
    retrieve: Get a booking with its payment plan
    partial_update: Change the booking date
    """

    queryset = Booking.objects.select_related('unit', 'customer', 'created_by')
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    pagination_class = SalesPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_queryset(self):
        """Filter bookings using input serializer validation."""
        queryset = super().get_queryset()

        filter_serializer = BookingFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'customer' in params:
            queryset = queryset.filter(customer_id=params['customer'])
        if 'unit' in params:
            queryset = queryset.filter(unit_id=params['unit'])

        return queryset

    @extend_schema(request=BookingCreateSerializer, responses={201: BookingSerializer})
    def create(self, request, *args, **kwargs):
        input_serializer = BookingCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            booking = create_booking(
                unit_id=data['unit'],
                customer_id=data['customer'],
                booking_date=data['booking_date'],
                created_by=request.user,
                down_payment=data.get('down_payment'),
                payment_type=data['payment_type'],
            )
        except SalesServiceError as e:
            raise ValidationError(str(e))

        return Response(
            BookingSerializer(booking).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=PaymentPlanInputSerializer,
        responses={200: PaymentPlanResponseSerializer},
        description="Generate (or regenerate) the installment schedule of a booking.",
        tags=['sales'],
    )
    @action(detail=True, methods=['post'])
    def payment_plan(self, request, pk=None):
        """
        Replace the booking's installment schedule.

        POST /api/sales/bookings/{id}/payment_plan/
        Body: {"plan_years": 4, "frequency_months": 3, "start_date": "2024-01-01"}
        """
        booking = self.get_object()

        input_serializer = PaymentPlanInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            schedule = generate_for_booking(
                booking_id=booking.id,
                unit_price=data.get('unit_price', booking.unit.price),
                plan_years=data['plan_years'],
                frequency_months=data['frequency_months'],
                start_date=data['start_date'],
            )
        except InstallmentsServiceError as e:
            raise ValidationError(str(e))

        return Response({
            'booking': BookingSerializer(schedule.booking).data,
            'installments': ScheduledInstallmentSerializer(schedule.installments, many=True).data,
        })

    @extend_schema(
        responses={200: ScheduledInstallmentSerializer(many=True)},
        description="Get the installment schedule of a booking.",
        tags=['sales'],
    )
    @action(detail=True, methods=['get'])
    def schedule(self, request, pk=None):
        """
        GET /api/sales/bookings/{id}/schedule/
        """
        booking = self.get_object()
        try:
            installments = get_booking_schedule(booking_id=booking.id)
        except BookingNotFoundError as e:
            raise NotFound(str(e))
        return Response(ScheduledInstallmentSerializer(installments, many=True).data)

    @extend_schema(request=None, responses={200: BookingSerializer}, tags=['sales'])
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """
        Cancel the booking and release its unit.

        POST /api/sales/bookings/{id}/cancel/
        """
        booking = self.get_object()
        try:
            booking = cancel_booking(booking_id=booking.id)
        except SalesServiceError as e:
            raise ValidationError(str(e))
        return Response(BookingSerializer(booking).data)


class PaymentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for payments.

    list: Get payments (filterable by booking, type, date range, link state)
    create: Record a payment, optionally applied to an installment
    retrieve: Get a payment
    destroy: Delete a payment, withdrawing it from its installment first
    """

    queryset = Payment.objects.select_related('booking', 'created_by')
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    pagination_class = SalesPagination
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter payments using input serializer validation."""
        queryset = super().get_queryset()

        filter_serializer = PaymentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'booking' in params:
            queryset = queryset.filter(booking_id=params['booking'])
        if 'payment_type' in params:
            queryset = queryset.filter(payment_type=params['payment_type'])
        if 'date_from' in params:
            queryset = queryset.filter(payment_date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(payment_date__lte=params['date_to'])
        if params.get('linked') is not None:
            queryset = queryset.filter(scheduled_installment__isnull=not params['linked'])

        return queryset

    @extend_schema(request=PaymentCreateSerializer, responses={201: PaymentSerializer})
    def create(self, request, *args, **kwargs):
        input_serializer = PaymentCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            payment = record_payment(
                booking_id=data['booking'],
                amount=data['amount'],
                payment_date=data['payment_date'],
                payment_type=data['payment_type'],
                created_by=request.user,
                receipt_number=data['receipt_number'],
                notes=data['notes'],
                scheduled_installment_id=data.get('scheduled_installment'),
                allocated_amount=data.get('allocated_amount'),
            )
        except (SalesServiceError, InstallmentsServiceError) as e:
            raise ValidationError(str(e))

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        payment = self.get_object()
        try:
            delete_payment(payment_id=payment.id)
        except PaymentNotFoundError as e:
            raise NotFound(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: UnlinkResponseSerializer}, tags=['sales'])
    @action(detail=True, methods=['post'])
    def unlink(self, request, pk=None):
        """
        Withdraw the payment from the installment it was applied to.

        POST /api/sales/payments/{id}/unlink/
        """
        payment = self.get_object()
        try:
            updated = unlink_payment(payment_id=payment.id)
        except InstallmentsServiceError as e:
            raise NotFound(str(e))

        payment.refresh_from_db()
        return Response({
            'installments_updated': updated,
            'payment': PaymentSerializer(payment).data,
        })
