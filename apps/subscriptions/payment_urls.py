from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    # POST /api/payments/create-subscription/  - Start checkout (trial mode)
    # POST /api/payments/webhook/              - Gateway webhook
    # POST /api/payments/verify-razorpay/      - Verify Razorpay payment
    path('create-subscription/', views.create_subscription, name='create-subscription'),
    path('webhook/', views.webhook, name='webhook'),
    path('verify-razorpay/', views.verify_razorpay, name='verify-razorpay'),
]
