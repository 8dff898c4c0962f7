import pytest
from decimal import Decimal
from unittest import mock
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.urls import reverse
from rest_framework import status
from apps.expenses.models import Expense, Participant
from apps.expenses.services import (
    create_expense,
    settle,
    CannotSettleError,
    ExpenseNotFoundError,
    ParticipantAlreadySettledError,
    ParticipantNotFoundError,
    SettlementAmountMismatchError,
    FeeProcessingFailedError,
)
from apps.groups.models import GroupBalance
from apps.transactions.models import Transaction, TransactionType, TransactionStatus


def settle_url(expense):
    return reverse('expenses:expense-settle', kwargs={'pk': expense.id})


@pytest.mark.django_db
class TestSettle:

    def test_full_settlement_scenario(self, shared_expense, payer, friend):
        """Both shares settled one by one; the expense closes on the last."""
        expense, breakdown = settle(
            expense_id=shared_expense.id,
            participant_id=payer.id,
            acting_user=payer,
        )
        assert breakdown['settlement_amount'] == Decimal('60.00')
        assert breakdown['founder_fee'] == Decimal('0.90')
        assert breakdown['net_to_payee'] == Decimal('59.10')
        assert breakdown['fee_percentage'] == '1.5%'
        assert expense.is_settled is False

        expense, breakdown = settle(
            expense_id=shared_expense.id,
            participant_id=friend.id,
            acting_user=friend,
        )
        assert breakdown['founder_fee'] == Decimal('0.60')
        assert breakdown['net_to_payee'] == Decimal('39.40')
        assert expense.is_settled is True

        fees = Transaction.objects.filter(type=TransactionType.SETTLEMENT_FEE)
        assert fees.count() == 2
        assert all(t.status == TransactionStatus.COMPLETED for t in fees)
        assert sum(t.fee for t in fees) == Decimal('1.50')

    def test_fee_is_not_rounded(self, payer, friend, group):
        expense = create_expense(
            paid_by=payer,
            description='Concert',
            amount=Decimal('33.33'),
            group_id=group.id,
            split_type='custom',
            participants=[
                {'user': payer.id, 'share': Decimal('0.00')},
                {'user': friend.id, 'share': Decimal('33.33')},
            ],
        )

        _, breakdown = settle(expense_id=expense.id, participant_id=friend.id, acting_user=friend)

        assert breakdown['founder_fee'] == Decimal('0.49995')
        record = Transaction.objects.get()
        assert record.fee == Decimal('0.499950')
        assert record.fee + record.net_amount == record.amount

    def test_ledger_record_contents(self, shared_expense, payer, friend):
        settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        record = Transaction.objects.get()
        assert record.user == friend
        assert record.amount == Decimal('40.00')
        assert record.currency == 'INR'
        assert record.metadata['expense_id'] == str(shared_expense.id)
        assert record.metadata['payer_id'] == str(friend.id)
        assert record.metadata['payee_id'] == str(payer.id)

    def test_currency_follows_acting_user(self, shared_expense, payer, friend):
        settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=payer)
        assert Transaction.objects.get().currency == 'AED'

    def test_participant_id_accepted(self, shared_expense, friend):
        participant = shared_expense.participants.get(user=friend)

        settle(expense_id=shared_expense.id, participant_id=participant.id, acting_user=friend)

        participant.refresh_from_db()
        assert participant.paid is True
        assert participant.settled_at is not None

    def test_explicit_amount_must_match_share(self, shared_expense, friend):
        with pytest.raises(SettlementAmountMismatchError):
            settle(
                expense_id=shared_expense.id,
                participant_id=friend.id,
                acting_user=friend,
                amount=Decimal('20.00'),
            )
        assert not Transaction.objects.exists()

    def test_amount_within_a_cent_accepted(self, shared_expense, friend):
        _, breakdown = settle(
            expense_id=shared_expense.id,
            participant_id=friend.id,
            acting_user=friend,
            amount=Decimal('39.99'),
        )
        assert breakdown['settlement_amount'] == Decimal('39.99')

    def test_second_settlement_rejected(self, shared_expense, friend):
        settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        with pytest.raises(ParticipantAlreadySettledError):
            settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        assert Transaction.objects.count() == 1

    def test_outsider_cannot_settle(self, shared_expense, friend, outsider):
        with pytest.raises(CannotSettleError):
            settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=outsider)

    def test_unknown_participant(self, shared_expense, outsider, payer):
        with pytest.raises(ParticipantNotFoundError):
            settle(expense_id=shared_expense.id, participant_id=outsider.id, acting_user=payer)

    def test_balances_refreshed(self, shared_expense, payer, friend, group):
        settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        balances = {b.user_id: b.balance for b in GroupBalance.objects.filter(group=group)}
        assert balances[payer.id] == Decimal('0.00')
        assert balances[friend.id] == Decimal('0.00')

    def test_malformed_ids(self, shared_expense, payer):
        with pytest.raises(ExpenseNotFoundError):
            settle(expense_id='not-a-uuid', participant_id=payer.id, acting_user=payer)

        with pytest.raises(ParticipantNotFoundError):
            settle(expense_id=shared_expense.id, participant_id='bogus', acting_user=payer)

    def test_expense_lookup_has_no_outer_join(self, shared_expense, friend):
        """Row locks cannot cover the nullable side of an outer join."""
        with CaptureQueriesContext(connection) as ctx:
            settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        expense_reads = [
            q['sql'] for q in ctx.captured_queries
            if q['sql'].startswith('SELECT') and 'FROM "expenses"' in q['sql']
        ]
        assert expense_reads
        assert not any('LEFT OUTER JOIN' in sql for sql in expense_reads)

    def test_fee_failure_rolls_back(self, shared_expense, friend):
        with mock.patch(
            'apps.expenses.services.settlement.record_settlement_fee',
            side_effect=RuntimeError('ledger down'),
        ):
            with pytest.raises(FeeProcessingFailedError):
                settle(expense_id=shared_expense.id, participant_id=friend.id, acting_user=friend)

        assert Participant.objects.get(expense=shared_expense, user=friend).paid is False
        assert Expense.objects.get(pk=shared_expense.pk).is_settled is False
        assert not Transaction.objects.exists()


@pytest.mark.django_db
class TestSettleAPI:

    def test_settle_200(self, payer, friend, group, friend_client):
        expense = create_expense(
            paid_by=payer,
            description='Flights',
            amount=Decimal('400.00'),
            group_id=group.id,
        )

        response = friend_client.post(
            settle_url(expense),
            {'participant_id': str(friend.id), 'amount': '200.00'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['message'] == 'Payment settled successfully'
        breakdown = response.data['data']['fee_breakdown']
        assert Decimal(breakdown['settlement_amount']) == Decimal('200.00')
        assert Decimal(breakdown['founder_fee']) == Decimal('3.00')
        assert Decimal(breakdown['net_to_payee']) == Decimal('197.00')
        assert breakdown['fee_percentage'] == '1.5%'
        assert response.data['data']['expense']['is_settled'] is False

    def test_settle_twice_400(self, shared_expense, friend, friend_client):
        url = settle_url(shared_expense)
        friend_client.post(url, {'participant_id': str(friend.id)}, format='json')

        response = friend_client.post(url, {'participant_id': str(friend.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['code'] == 'participant_already_settled'
        assert Transaction.objects.count() == 1

    def test_amount_mismatch_400(self, shared_expense, friend, friend_client):
        response = friend_client.post(
            settle_url(shared_expense),
            {'participant_id': str(friend.id), 'amount': '10.00'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'settlement_amount_mismatch'

    def test_outsider_403(self, shared_expense, friend, outsider_client):
        response = outsider_client.post(
            settle_url(shared_expense),
            {'participant_id': str(friend.id)},
            format='json',
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_fee_failure_500(self, shared_expense, friend, friend_client):
        with mock.patch(
            'apps.expenses.services.settlement.record_settlement_fee',
            side_effect=RuntimeError('ledger down'),
        ):
            response = friend_client.post(
                settle_url(shared_expense),
                {'participant_id': str(friend.id)},
                format='json',
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'fee_processing_failed'
        assert Participant.objects.get(expense=shared_expense, user=friend).paid is False
        assert not Transaction.objects.exists()

    def test_unauthenticated(self, shared_expense, friend, api_client):
        response = api_client.post(
            settle_url(shared_expense),
            {'participant_id': str(friend.id)},
            format='json',
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
