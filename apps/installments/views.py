from rest_framework import mixins, viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.conf import settings
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsFinanceStaffOrReadOnly
from .models import ScheduledInstallment
from .serializers import (
    InstallmentFilterSerializer,
    LinkPaymentInputSerializer,
    PaymentNotificationSerializer,
    ScheduledInstallmentSerializer,
    UpcomingFilterSerializer,
    UpcomingResponseSerializer,
    UpcomingInstallmentSerializer,
)
from .services import (
    get_upcoming_installments,
    link_payment,
    get_unread_notifications,
    mark_notification_read,
    mark_all_notifications_read,
    InstallmentsServiceError,
    InstallmentNotFoundError,
    PaymentNotFoundError,
    NotificationNotFoundError,
)


# Response serializers for API documentation
class ReadAllResponseSerializer(drf_serializers.Serializer):
    marked_read = drf_serializers.IntegerField()


class InstallmentPagination(PageNumberPagination):
    """Custom pagination for installments."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class InstallmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for scheduled installments.

    Installments are created by schedule generation and paid through
    payment links; only their notes can be edited here.

    list: Get installments (filterable by booking, status, due date range)
    retrieve: Get a specific installment
    partial_update: Edit notes
    """

    queryset = ScheduledInstallment.objects.select_related('booking', 'payment')
    serializer_class = ScheduledInstallmentSerializer
    permission_classes = [IsAuthenticated, IsFinanceStaffOrReadOnly]
    pagination_class = InstallmentPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']
    lookup_value_regex = '[0-9a-fA-F-]{32,36}'

    def get_queryset(self):
        """Filter installments using input serializer validation."""
        queryset = super().get_queryset()

        if self.action != 'list':
            return queryset

        filter_serializer = InstallmentFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'booking' in params:
            queryset = queryset.filter(booking_id=params['booking'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'due_from' in params:
            queryset = queryset.filter(due_date__gte=params['due_from'])
        if 'due_to' in params:
            queryset = queryset.filter(due_date__lte=params['due_to'])

        return queryset.order_by('due_date', 'installment_number')

    @extend_schema(
        parameters=[
            OpenApiParameter('days_ahead', OpenApiTypes.INT, description='Window in days (default 30)'),
        ],
        responses={200: UpcomingResponseSerializer},
        description="Open installments due within the window, with their urgency.",
        tags=['installments'],
    )
    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """
        GET /api/installments/upcoming/?days_ahead=30
        """
        filter_serializer = UpcomingFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        days_ahead = filter_serializer.validated_data.get(
            'days_ahead', settings.INSTALLMENT_UPCOMING_DAYS
        )

        upcoming = get_upcoming_installments(days_ahead=days_ahead)

        return Response({
            'days_ahead': days_ahead,
            'count': len(upcoming),
            'installments': UpcomingInstallmentSerializer(upcoming, many=True).data,
        })

    @extend_schema(
        request=LinkPaymentInputSerializer,
        responses={200: ScheduledInstallmentSerializer},
        description="Apply a recorded payment to this installment.",
        tags=['installments'],
    )
    @action(detail=True, methods=['post'])
    def link_payment(self, request, pk=None):
        """
        POST /api/installments/{id}/link_payment/
        Body: {"payment": "<uuid>", "amount": "2500.00"}
        """
        installment = self.get_object()

        input_serializer = LinkPaymentInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            installment = link_payment(
                installment_id=installment.id,
                payment_id=input_serializer.validated_data['payment'],
                amount=input_serializer.validated_data.get('amount'),
            )
        except (InstallmentNotFoundError, PaymentNotFoundError) as e:
            raise NotFound(str(e))
        except InstallmentsServiceError as e:
            raise ValidationError(str(e))

        return Response(ScheduledInstallmentSerializer(installment).data)


@extend_schema(
    responses={200: PaymentNotificationSerializer(many=True)},
    description="Unread payment notifications for the current user.",
    tags=['installments'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_notifications(request):
    """Get unread notifications addressed to the user or to everyone."""
    notifications = get_unread_notifications(user=request.user)
    return Response(PaymentNotificationSerializer(notifications, many=True).data)


@extend_schema(
    request=None,
    responses={200: PaymentNotificationSerializer},
    tags=['installments'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def read_notification(request, notification_id):
    """Mark one notification as read for the current user."""
    try:
        notification = mark_notification_read(
            notification_id=notification_id,
            user=request.user
        )
    except NotificationNotFoundError as e:
        raise NotFound(str(e))
    return Response(PaymentNotificationSerializer(notification).data)


@extend_schema(
    request=None,
    responses={200: ReadAllResponseSerializer},
    tags=['installments'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def read_all_notifications(request):
    """Mark every notification visible to the user as read."""
    count = mark_all_notifications_read(user=request.user)
    return Response({'marked_read': count}, status=status.HTTP_200_OK)
