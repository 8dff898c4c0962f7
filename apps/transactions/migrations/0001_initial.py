# Generated manually for transactions app

import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('subscription', 'Subscription'), ('settlement_fee', 'Settlement fee'), ('payout', 'Payout')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('currency', models.CharField(choices=[('AED', 'UAE Dirham'), ('INR', 'Indian Rupee'), ('USD', 'US Dollar')], max_length=3)),
                ('fee', models.DecimalField(decimal_places=6, default=Decimal('0'), max_digits=16)),
                ('net_amount', models.DecimalField(decimal_places=6, max_digits=16)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('payment_gateway', models.CharField(blank=True, choices=[('stripe', 'Stripe'), ('razorpay', 'Razorpay'), ('manual', 'Manual')], max_length=20, null=True)),
                ('gateway_transaction_id', models.CharField(blank=True, max_length=255, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed'), ('refunded', 'Refunded')], default='pending', max_length=20)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'transactions',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='transaction',
            index=models.Index(fields=['user', 'created_at'], name='transaction_user_id_6e1c2a_idx'),
        ),
        migrations.AddIndex(
            model_name='transaction',
            index=models.Index(fields=['type', 'status', 'created_at'], name='transaction_type_st_9d4b70_idx'),
        ),
    ]
