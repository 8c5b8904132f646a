import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.sales.models import Unit, UnitStatus, Customer, Booking
from apps.installments.models import ScheduledInstallment
from apps.installments.services import generate_for_booking


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def accountant(db):
    """Create and return an accountant."""
    return User.objects.create_user(
        email='accountant@example.com',
        password='TestPass123!',
        display_name='Accountant',
        role=UserRole.ACCOUNTANT,
    )


@pytest.fixture
def sales_agent(db):
    """Create and return a sales agent."""
    return User.objects.create_user(
        email='agent@example.com',
        password='TestPass123!',
        display_name='Sales Agent',
        role=UserRole.SALES,
    )


@pytest.fixture
def accountant_client(api_client, accountant):
    """Return API client authenticated as the accountant."""
    refresh = RefreshToken.for_user(accountant)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def agent_client(api_client, sales_agent):
    """Return API client authenticated as the sales agent."""
    refresh = RefreshToken.for_user(sales_agent)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def available_unit(db):
    """Create and return an available unit priced 120000."""
    return Unit.objects.create(
        unit_number='A-101',
        unit_type='Apartment',
        price=Decimal('120000.00'),
    )


@pytest.fixture
def customer(db):
    return Customer.objects.create(name='Omar Nasser', phone='0111111111')


@pytest.fixture
def booking(db, customer, accountant):
    """Create and return an active booking for a booked unit."""
    unit = Unit.objects.create(
        unit_number='C-303',
        status=UnitStatus.BOOKED,
        price=Decimal('120000.00'),
    )
    return Booking.objects.create(
        unit=unit,
        customer=customer,
        booking_date=date(2023, 12, 1),
        created_by=accountant,
    )


@pytest.fixture
def scheduled_booking(booking):
    """Booking with 16 quarterly installments of 7500 starting 2024-01-01."""
    generate_for_booking(
        booking_id=booking.id,
        unit_price=booking.unit.price,
        plan_years=4,
        frequency_months=3,
        start_date=date(2024, 1, 1),
    )
    booking.refresh_from_db()
    return booking


@pytest.fixture
def first_installment(scheduled_booking):
    return ScheduledInstallment.objects.get(booking=scheduled_booking, installment_number=1)
