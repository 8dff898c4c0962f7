from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.common.responses import envelope

from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseUpdateSerializer,
    ExpenseSummarySerializer,
    SettleSerializer,
    FeeBreakdownSerializer,
)

from apps.expenses.services import (
    create_expense,
    list_expenses,
    get_expense,
    update_expense,
    delete_expense,
    settle,
)


class ExpenseViewSet(viewsets.ViewSet):
    """
    ViewSet for Expense operations.

    All business logic is handled by services; service exceptions
    propagate to the project exception handler.

    list: Expenses paid by the user plus a summary
    create: Create an expense and its participant shares
    retrieve: Get an expense (payer or participant)
    update: Update an expense (payer only)
    partial_update: Partially update an expense (payer only)
    destroy: Delete an expense (payer only)
    settle: Settle one participant's share
    """

    permission_classes = [IsAuthenticated]

    def _expense_data(self, expense):
        return ExpenseSerializer(expense, context={'request': self.request}).data

    @extend_schema(responses=ExpenseSerializer(many=True))
    def list(self, request):
        expenses, summary = list_expenses(user=request.user)
        return envelope({
            'expenses': ExpenseSerializer(expenses, many=True).data,
            'summary': ExpenseSummarySerializer(summary).data,
        })

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer})
    def create(self, request):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        expense = create_expense(
            paid_by=request.user,
            description=data['description'],
            amount=data['amount'],
            category=data['category'],
            date=data.get('date'),
            group_id=data.get('group'),
            split_type=data['split_type'],
            participants=data.get('participants'),
            currency=data.get('currency'),
        )

        expense = get_expense(expense_id=expense.id, user=request.user)
        return envelope(
            {'expense': self._expense_data(expense)},
            'Expense created successfully',
            status.HTTP_201_CREATED,
        )

    @extend_schema(responses=ExpenseSerializer)
    def retrieve(self, request, pk=None):
        expense = get_expense(expense_id=pk, user=request.user)
        return envelope({'expense': self._expense_data(expense)})

    @extend_schema(request=ExpenseUpdateSerializer, responses=ExpenseSerializer)
    def update(self, request, pk=None):
        serializer = ExpenseUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense = update_expense(expense_id=pk, user=request.user, **serializer.validated_data)
        return envelope({'expense': self._expense_data(expense)}, 'Expense updated successfully')

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        delete_expense(expense_id=pk, user=request.user)
        return envelope(message='Expense deleted successfully')

    @extend_schema(request=SettleSerializer, responses=ExpenseSerializer)
    @action(detail=True, methods=['post'])
    def settle(self, request, pk=None):
        """Settle one participant's share; the founder fee is recorded."""
        serializer = SettleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense, breakdown = settle(
            expense_id=pk,
            participant_id=serializer.validated_data['participant_id'],
            acting_user=request.user,
            amount=serializer.validated_data.get('amount'),
        )

        return envelope(
            {
                'expense': self._expense_data(expense),
                'fee_breakdown': FeeBreakdownSerializer(breakdown).data,
            },
            'Payment settled successfully',
        )
