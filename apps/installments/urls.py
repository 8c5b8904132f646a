from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'installments'

router = SimpleRouter()
router.register(r'', views.InstallmentViewSet, basename='installment')

urlpatterns = [
    # Notification routes (before the router so they are not read as installment IDs)
    path('notifications/', views.unread_notifications, name='notifications'),
    path('notifications/read_all/', views.read_all_notifications, name='notifications-read-all'),
    path('notifications/<uuid:notification_id>/read/', views.read_notification, name='notification-read'),

    # Installment ViewSet routes
    # GET    /api/installments/                     - List installments
    # GET    /api/installments/{id}/                - Get installment
    # PATCH  /api/installments/{id}/                - Edit notes
    # GET    /api/installments/upcoming/            - Upcoming with urgency
    # POST   /api/installments/{id}/link_payment/   - Apply a payment
    path('', include(router.urls)),
]
