"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear

This creates:
- 3 staff users (admin, accountant, sales agent)
- 8 units, half of them booked
- 4 customers with bookings
- Installment schedules with a mix of paid, partial and open installments
"""

from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.installments.models import PaymentNotification, ScheduledInstallment
from apps.installments.services import generate_for_booking
from apps.sales.models import Booking, Customer, Payment, PaymentType, Unit, UnitStatus
from apps.sales.services import create_booking, record_payment


UNITS = [
    ('A-101', 'Apartment', Decimal('120000.00')),
    ('A-102', 'Apartment', Decimal('125000.00')),
    ('A-201', 'Apartment', Decimal('98000.00')),
    ('B-001', 'Duplex', Decimal('240000.00')),
    ('B-002', 'Duplex', Decimal('255500.00')),
    ('S-01', 'Shop', Decimal('75000.00')),
    ('S-02', 'Shop', Decimal('81250.00')),
    ('V-1', 'Villa', Decimal('510000.00')),
]

CUSTOMERS = [
    ('Layla Hassan', '0100000001', 'layla@example.com'),
    ('Omar Nasser', '0100000002', 'omar@example.com'),
    ('Huda Karim', '0100000003', ''),
    ('Sami Aziz', '0100000004', 'sami@example.com'),
]

# unit index, customer index, plan years, frequency months, installments to pay
PLANS = [
    (0, 0, 4, 3, 3),
    (3, 1, 5, 1, 10),
    (5, 2, 4, 6, 1),
    (7, 3, 5, 12, 0),
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        units = self.create_units()
        customers = self.create_customers()
        self.create_bookings(users, units, customers)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin)')
        self.stdout.write('  accountant@example.com / password123 (accountant)')
        self.stdout.write('  agent@example.com / password123 (sales)')

    def clear_data(self):
        """Clear all sales data from the database."""
        PaymentNotification.objects.all().delete()
        Payment.objects.all().delete()
        ScheduledInstallment.objects.all().delete()
        Booking.objects.all().delete()
        Customer.objects.all().delete()
        Unit.objects.all().delete()
        User.objects.filter(
            email__in=['admin@example.com', 'accountant@example.com', 'agent@example.com']
        ).delete()

    def create_users(self):
        """Create staff users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'role': UserRole.ADMIN,
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        accountant, _ = User.objects.get_or_create(
            email='accountant@example.com',
            defaults={
                'display_name': 'Office Accountant',
                'role': UserRole.ACCOUNTANT,
            }
        )
        accountant.set_password('password123')
        accountant.save()

        agent, _ = User.objects.get_or_create(
            email='agent@example.com',
            defaults={
                'display_name': 'Sales Agent',
                'role': UserRole.SALES,
            }
        )
        agent.set_password('password123')
        agent.save()

        return {'admin': admin, 'accountant': accountant, 'agent': agent}

    def create_units(self):
        self.stdout.write('  Creating units...')
        units = []
        for unit_number, unit_type, price in UNITS:
            unit, _ = Unit.objects.get_or_create(
                unit_number=unit_number,
                defaults={'unit_type': unit_type, 'price': price},
            )
            units.append(unit)
        return units

    def create_customers(self):
        self.stdout.write('  Creating customers...')
        return [
            Customer.objects.create(name=name, phone=phone, email=email)
            for name, phone, email in CUSTOMERS
        ]

    def create_bookings(self, users, units, customers):
        """Book units, generate schedules and pay the first installments."""
        self.stdout.write('  Creating bookings and schedules...')
        today = timezone.localdate()

        for unit_index, customer_index, years, frequency, paid_count in PLANS:
            unit = units[unit_index]
            if unit.status != UnitStatus.AVAILABLE:
                self.stdout.write(f'    Skipping {unit.unit_number}: already {unit.status}')
                continue

            start_date = date(today.year, today.month, 1) - relativedelta(months=frequency * paid_count)
            booking = create_booking(
                unit_id=unit.id,
                customer_id=customers[customer_index].id,
                booking_date=start_date - relativedelta(months=1),
                created_by=users['agent'],
            )
            schedule = generate_for_booking(
                booking_id=booking.id,
                unit_price=unit.price,
                plan_years=years,
                frequency_months=frequency,
                start_date=start_date,
            )

            for installment in schedule.installments[:paid_count]:
                record_payment(
                    booking_id=booking.id,
                    amount=installment.amount,
                    payment_date=installment.due_date,
                    payment_type=PaymentType.BANK_TRANSFER,
                    created_by=users['accountant'],
                    scheduled_installment_id=installment.id,
                )

            # Leave the next installment half paid
            if paid_count and len(schedule.installments) > paid_count:
                next_installment = schedule.installments[paid_count]
                record_payment(
                    booking_id=booking.id,
                    amount=(next_installment.amount / 2).quantize(Decimal('0.01')),
                    payment_date=today,
                    payment_type=PaymentType.CASH,
                    created_by=users['accountant'],
                    scheduled_installment_id=next_installment.id,
                )

            self.stdout.write(
                f'    {unit.unit_number}: {len(schedule.installments)} installments, '
                f'{paid_count} paid'
            )
