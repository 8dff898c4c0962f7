"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice, bob, charlie)
- 2 groups (Flat 4B, Goa Trip) with members
- Expenses with equal, custom and percentage splits
- One settled share with its founder fee in the ledger
"""

from datetime import date, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, Country
from apps.expenses.models import Expense, SplitType
from apps.expenses.services import create_expense, settle
from apps.groups.models import Group
from apps.groups.services import create_group, add_member


SAMPLE_EMAILS = [
    'admin@example.com',
    'alice@example.com',
    'bob@example.com',
    'charlie@example.com',
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help="Remove the sample users' groups and expenses first",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        groups = self.create_groups(users)
        self.create_expenses(users, groups)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')
        self.stdout.write('  charlie@example.com / password123')

    def clear_data(self):
        """
        Delete groups and expenses owned by the sample users.

        Users stay: ledger rows reference them and are never deleted.
        """
        sample_users = User.objects.filter(email__in=SAMPLE_EMAILS)
        Expense.objects.filter(paid_by__in=sample_users).delete()
        Group.objects.filter(created_by__in=sample_users).delete()
        sample_users.update(groups_created=0, members_added=0, total_expenses=0)

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        specs = [
            ('admin', 'admin@example.com', 'Admin User', Country.UAE, 'admin123'),
            ('alice', 'alice@example.com', 'Alice Sharma', Country.INDIA, 'password123'),
            ('bob', 'bob@example.com', 'Bob Mathew', Country.INDIA, 'password123'),
            ('charlie', 'charlie@example.com', 'Charlie Haddad', Country.UAE, 'password123'),
        ]

        users = {}
        for key, email, name, country, password in specs:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'name': name,
                    'country': country,
                    'email_verified': True,
                    'is_staff': key == 'admin',
                    'is_superuser': key == 'admin',
                }
            )
            user.set_password(password)
            user.save()
            users[key] = user

        return users

    def create_groups(self, users):
        """Create groups through the services so limits and counters apply."""
        self.stdout.write('  Creating groups...')

        flat = create_group(
            name='Flat 4B',
            owner=users['alice'],
            description='Rent, groceries and bills',
        )
        for key in ('bob', 'charlie'):
            add_member(
                group_id=flat.id,
                added_by=users['alice'],
                name=users[key].name,
                email=users[key].email,
            )

        trip = create_group(
            name='Goa Trip',
            owner=users['bob'],
            description='December trip',
        )
        add_member(group_id=trip.id, added_by=users['bob'], name=users['alice'].name, email=users['alice'].email)
        add_member(group_id=trip.id, added_by=users['bob'], name='Dev Patel', email='dev@example.com')

        return {'flat': flat, 'trip': trip}

    def create_expenses(self, users, groups):
        """Create a few expenses and settle one share."""
        self.stdout.write('  Creating expenses...')

        alice, bob, charlie = users['alice'], users['bob'], users['charlie']
        today = date.today()

        groceries = create_expense(
            paid_by=alice,
            description='Weekly groceries',
            amount=Decimal('90.00'),
            category='food',
            date=today - timedelta(days=3),
            group_id=groups['flat'].id,
        )

        create_expense(
            paid_by=bob,
            description='Electricity bill',
            amount=Decimal('120.00'),
            category='bills',
            date=today - timedelta(days=1),
            group_id=groups['flat'].id,
            split_type=SplitType.CUSTOM,
            participants=[
                {'user': alice.id, 'share': Decimal('50.00')},
                {'user': bob.id, 'share': Decimal('40.00')},
                {'user': charlie.id, 'share': Decimal('30.00')},
            ],
        )

        create_expense(
            paid_by=bob,
            description='Beach shack dinner',
            amount=Decimal('75.50'),
            category='food',
            date=today,
            group_id=groups['trip'].id,
            split_type=SplitType.PERCENTAGE,
            participants=[
                {'user': bob.id, 'percentage': Decimal('60')},
                {'user': alice.id, 'percentage': Decimal('40')},
            ],
        )

        create_expense(
            paid_by=charlie,
            description='Gym membership',
            amount=Decimal('45.00'),
            category='healthcare',
        )

        settle(expense_id=groceries.id, participant_id=bob.id, acting_user=bob)
