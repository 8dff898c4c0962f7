import logging
from decimal import Decimal

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.accounts.models import Country
from apps.common.responses import envelope

from .plans import list_plans
from .serializers import (
    PlanSerializer,
    SubscriptionSummarySerializer,
    CreateSubscriptionSerializer,
    VerifyRazorpaySerializer,
)
from .services import get_subscription_summary

logger = logging.getLogger(__name__)

# Checkout price per country while only the basic plan is sold
SUBSCRIPTION_PRICING = {
    Country.UAE: {'amount': Decimal('35.00'), 'currency': 'AED'},
    Country.INDIA: {'amount': Decimal('249.00'), 'currency': 'INR'},
}


@extend_schema(
    responses={200: PlanSerializer(many=True)},
    description="List plan tiers with their limits and prices.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def plans(request):
    """List available plans."""
    serializer = PlanSerializer(list_plans(), many=True)
    return envelope({'plans': serializer.data})


@extend_schema(
    responses={200: SubscriptionSummarySerializer},
    description="Current user's plan, status, limits and usage.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_subscription(request):
    """Get current user's subscription summary."""
    summary = get_subscription_summary(user=request.user)
    return envelope({'subscription': SubscriptionSummarySerializer(summary).data})


# -----------------------------------------------------------------------------
# Payment gateway endpoints (trial mode)
# -----------------------------------------------------------------------------

@extend_schema(
    request=CreateSubscriptionSerializer,
    description="Start a subscription checkout. Runs in trial mode until a gateway is linked.",
    tags=['payments'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_subscription(request):
    """Create subscription payment intent (trial mode)."""
    serializer = CreateSubscriptionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    country = serializer.validated_data['country']
    price = SUBSCRIPTION_PRICING.get(country, SUBSCRIPTION_PRICING[Country.UAE])

    return envelope(
        {
            'trial': True,
            'country': country,
            'plan': serializer.validated_data['plan'],
            'price': price,
        },
        message='Free trial active! Payment integration coming soon.',
    )


@extend_schema(
    request=None,
    description="Gateway webhook receiver (trial mode acknowledgement).",
    tags=['payments'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def webhook(request):
    """Acknowledge gateway webhooks."""
    logger.info("Webhook received (trial mode)")
    return envelope({'received': True}, message='Webhook processed in trial mode')


@extend_schema(
    request=VerifyRazorpaySerializer,
    description="Verify a Razorpay payment (simulated in trial mode).",
    tags=['payments'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_razorpay(request):
    """Verify Razorpay payment (trial mode)."""
    serializer = VerifyRazorpaySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    return envelope(
        {'trial': True},
        message='Payment verification simulated for trial period',
        status=status.HTTP_200_OK,
    )
