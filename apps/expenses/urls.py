from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # GET    /api/expenses/              - List user's expenses with summary
    # POST   /api/expenses/              - Create expense
    # GET    /api/expenses/{id}/         - Get expense (payer or participant)
    # PUT    /api/expenses/{id}/         - Update expense (payer)
    # PATCH  /api/expenses/{id}/         - Partial update (payer)
    # DELETE /api/expenses/{id}/         - Delete expense (payer)
    # POST   /api/expenses/{id}/settle/  - Settle a participant's share

    path('', include(router.urls)),
]
