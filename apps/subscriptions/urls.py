from django.urls import path
from . import views

app_name = 'subscriptions'

urlpatterns = [
    # GET /api/subscriptions/plans/  - Plan table
    # GET /api/subscriptions/me/     - Current user's plan and usage
    path('plans/', views.plans, name='plans'),
    path('me/', views.my_subscription, name='me'),
]
