from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'units', views.UnitViewSet, basename='unit')
router.register(r'customers', views.CustomerViewSet, basename='customer')
router.register(r'bookings', views.BookingViewSet, basename='booking')
router.register(r'payments', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # Booking routes
    # GET    /api/sales/bookings/                    - List bookings
    # POST   /api/sales/bookings/                    - Book a unit
    # GET    /api/sales/bookings/{id}/               - Get booking
    # PATCH  /api/sales/bookings/{id}/               - Update booking date
    # POST   /api/sales/bookings/{id}/payment_plan/  - Generate schedule
    # GET    /api/sales/bookings/{id}/schedule/      - Get schedule
    # POST   /api/sales/bookings/{id}/cancel/        - Cancel booking

    # Payment routes
    # GET    /api/sales/payments/                    - List payments
    # POST   /api/sales/payments/                    - Record payment
    # GET    /api/sales/payments/{id}/               - Get payment
    # DELETE /api/sales/payments/{id}/               - Delete payment
    # POST   /api/sales/payments/{id}/unlink/        - Withdraw from installment

    path('', include(router.urls)),
]
