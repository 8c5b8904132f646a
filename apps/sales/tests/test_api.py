import pytest
from decimal import Decimal
from rest_framework import status

from apps.sales.models import Booking, Payment, UnitStatus
from apps.installments.models import InstallmentStatus, ScheduledInstallment


@pytest.mark.django_db
class TestUnits:
    """Test /api/sales/units/"""

    def test_filter_by_status(self, agent_client, available_unit, booking):
        response = agent_client.get('/api/sales/units/', {'status': 'available'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['unit_number'] == 'A-101'

    def test_unknown_status_is_400(self, agent_client, available_unit):
        response = agent_client.get('/api/sales/units/', {'status': 'demolished'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestBookings:
    """Test /api/sales/bookings/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get('/api/sales/bookings/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_agent_can_list(self, agent_client, booking):
        response = agent_client.get('/api/sales/bookings/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['customer_name'] == 'Omar Nasser'

    def test_agent_cannot_create(self, agent_client, available_unit, customer):
        response = agent_client.post('/api/sales/bookings/', {
            'unit': str(available_unit.id),
            'customer': str(customer.id),
            'booking_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_accountant_creates_booking(self, accountant_client, available_unit, customer):
        response = accountant_client.post('/api/sales/bookings/', {
            'unit': str(available_unit.id),
            'customer': str(customer.id),
            'booking_date': '2024-01-01',
            'down_payment': '5000.00',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['unit_number'] == 'A-101'
        assert response.data['total_installments'] is None
        assert response.data['has_payment_plan'] is False
        available_unit.refresh_from_db()
        assert available_unit.status == UnitStatus.BOOKED
        assert Payment.objects.filter(booking_id=response.data['id']).count() == 1

    def test_booking_unavailable_unit(self, accountant_client, booking, customer):
        response = accountant_client.post('/api/sales/bookings/', {
            'unit': str(booking.unit_id),
            'customer': str(customer.id),
            'booking_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancel(self, accountant_client, booking):
        response = accountant_client.post(f'/api/sales/bookings/{booking.id}/cancel/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'


@pytest.mark.django_db
class TestPaymentPlan:
    """Test POST /api/sales/bookings/{id}/payment_plan/"""

    def test_generate(self, accountant_client, booking):
        response = accountant_client.post(f'/api/sales/bookings/{booking.id}/payment_plan/', {
            'plan_years': 4,
            'frequency_months': 3,
            'start_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['booking']['monthly_amount'] == '2500.00'
        assert response.data['booking']['installment_amount'] == '7500.00'
        assert response.data['booking']['total_installments'] == 16
        assert response.data['booking']['has_payment_plan'] is True
        assert len(response.data['installments']) == 16
        total = sum(Decimal(i['amount']) for i in response.data['installments'])
        assert total == Decimal('120000.00')

    def test_custom_price(self, accountant_client, booking):
        response = accountant_client.post(f'/api/sales/bookings/{booking.id}/payment_plan/', {
            'plan_years': 5,
            'frequency_months': 12,
            'start_date': '2024-01-01',
            'unit_price': '60000.00',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [i['amount'] for i in response.data['installments']] == ['12000.00'] * 5

    def test_invalid_plan_is_400(self, accountant_client, scheduled_booking):
        response = accountant_client.post(f'/api/sales/bookings/{scheduled_booking.id}/payment_plan/', {
            'plan_years': 3,
            'frequency_months': 3,
            'start_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ScheduledInstallment.objects.filter(booking=scheduled_booking).count() == 16

    def test_cancelled_booking_is_400(self, accountant_client, scheduled_booking):
        accountant_client.post(f'/api/sales/bookings/{scheduled_booking.id}/cancel/')

        response = accountant_client.post(f'/api/sales/bookings/{scheduled_booking.id}/payment_plan/', {
            'plan_years': 5,
            'frequency_months': 1,
            'start_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        scheduled_booking.refresh_from_db()
        assert scheduled_booking.total_installments == 16

    def test_agent_cannot_generate(self, agent_client, booking):
        response = agent_client.post(f'/api/sales/bookings/{booking.id}/payment_plan/', {
            'plan_years': 4,
            'frequency_months': 3,
            'start_date': '2024-01-01',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_schedule(self, agent_client, scheduled_booking):
        response = agent_client.get(f'/api/sales/bookings/{scheduled_booking.id}/schedule/')

        assert response.status_code == status.HTTP_200_OK
        assert [i['installment_number'] for i in response.data] == list(range(1, 17))
        assert response.data[1]['due_date'] == '2024-04-01'


@pytest.mark.django_db
class TestPayments:
    """Test /api/sales/payments/"""

    def test_record_and_link(self, accountant_client, scheduled_booking, first_installment):
        response = accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '7500.00',
            'payment_date': '2024-01-02',
            'payment_type': 'cheque',
            'scheduled_installment': str(first_installment.id),
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['allocated_amount'] == '7500.00'
        assert response.data['created_by']['email'] == 'accountant@example.com'
        first_installment.refresh_from_db()
        assert first_installment.status == InstallmentStatus.PAID

    def test_overpayment_is_400(self, accountant_client, scheduled_booking, first_installment):
        response = accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '9000.00',
            'payment_date': '2024-01-02',
            'scheduled_installment': str(first_installment.id),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Payment.objects.count() == 0

    def test_allocation_needs_installment(self, accountant_client, scheduled_booking):
        response = accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '100.00',
            'payment_date': '2024-01-02',
            'allocated_amount': '50.00',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_filter_linked(self, accountant_client, scheduled_booking, first_installment):
        accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '7500.00',
            'payment_date': '2024-01-02',
            'scheduled_installment': str(first_installment.id),
        }, format='json')
        accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '100.00',
            'payment_date': '2024-01-03',
        }, format='json')

        response = accountant_client.get('/api/sales/payments/', {'linked': 'true'})
        assert response.data['count'] == 1

        response = accountant_client.get('/api/sales/payments/', {'linked': 'false'})
        assert response.data['count'] == 1

        response = accountant_client.get('/api/sales/payments/')
        assert response.data['count'] == 2

    def test_unlink(self, accountant_client, scheduled_booking, first_installment):
        created = accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '7500.00',
            'payment_date': '2024-01-02',
            'scheduled_installment': str(first_installment.id),
        }, format='json')

        response = accountant_client.post(f"/api/sales/payments/{created.data['id']}/unlink/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data['installments_updated'] == 1
        assert response.data['payment']['scheduled_installment'] is None
        first_installment.refresh_from_db()
        assert first_installment.paid_amount == Decimal('0.00')

    def test_delete(self, accountant_client, scheduled_booking, first_installment):
        created = accountant_client.post('/api/sales/payments/', {
            'booking': str(scheduled_booking.id),
            'amount': '3000.00',
            'payment_date': '2024-01-02',
            'scheduled_installment': str(first_installment.id),
        }, format='json')

        response = accountant_client.delete(f"/api/sales/payments/{created.data['id']}/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Payment.objects.count() == 0
        first_installment.refresh_from_db()
        assert first_installment.status != InstallmentStatus.PARTIALLY_PAID
        assert first_installment.paid_amount == Decimal('0.00')

    def test_agent_cannot_delete(self, agent_client, booking):
        payment = Payment.objects.create(
            booking=booking,
            amount=Decimal('100.00'),
            payment_date='2024-01-02',
        )

        response = agent_client.delete(f'/api/sales/payments/{payment.id}/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Payment.objects.filter(id=payment.id).exists()
