from django.urls import path
from . import views

app_name = 'transactions'

urlpatterns = [
    # GET /api/transactions/revenue/?period=month|year - Founder revenue
    path('revenue/', views.revenue, name='revenue'),
    # GET /api/transactions/history/                   - User's transactions
    path('history/', views.history, name='history'),
]
