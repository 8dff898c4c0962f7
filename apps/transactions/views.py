from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.responses import envelope

from .serializers import (
    TransactionSerializer,
    RevenueSerializer,
    RevenueQuerySerializer,
)
from .services import get_founder_revenue, get_transaction_history


@extend_schema(
    parameters=[OpenApiParameter('period', str, enum=['month', 'year'])],
    responses=RevenueSerializer,
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def revenue(request):
    """Founder revenue for the current month or year."""
    query = RevenueQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    summary = get_founder_revenue(period=query.validated_data['period'])
    return envelope({'revenue': RevenueSerializer(summary).data})


@extend_schema(responses=TransactionSerializer(many=True))
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def history(request):
    """Current user's most recent transactions."""
    transactions = get_transaction_history(user=request.user)
    return envelope({'transactions': TransactionSerializer(transactions, many=True).data})
