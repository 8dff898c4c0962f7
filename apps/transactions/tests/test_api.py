import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestRevenueEndpoint:

    def test_default_month(self, make_transaction, authenticated_client):
        make_transaction(amount='200.00')
        url = reverse('transactions:revenue')

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        revenue = response.data['data']['revenue']
        assert revenue['period'] == 'month'
        assert Decimal(revenue['total_revenue']) == Decimal('3.00')
        assert revenue['transaction_count'] == 1
        assert revenue['by_currency'][0]['currency'] == 'INR'

    def test_year(self, authenticated_client):
        url = reverse('transactions:revenue')

        response = authenticated_client.get(url, {'period': 'year'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['revenue']['period'] == 'year'
        assert response.data['data']['revenue']['by_currency'] == []

    def test_invalid_period(self, authenticated_client):
        url = reverse('transactions:revenue')

        response = authenticated_client.get(url, {'period': 'week'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'period' in response.data['errors']

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('transactions:revenue'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestHistoryEndpoint:

    def test_lists_own_transactions(self, make_transaction, other_user, authenticated_client):
        mine = make_transaction(amount='50.00')
        make_transaction(user=other_user)
        url = reverse('transactions:history')

        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        transactions = response.data['data']['transactions']
        assert [t['id'] for t in transactions] == [str(mine.id)]
        assert transactions[0]['type'] == 'settlement_fee'
        assert transactions[0]['amount'] == '50.00'

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('transactions:history'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
