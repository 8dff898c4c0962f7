from django.contrib import admin
from apps.transactions.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Ledger entries are read-only in the admin."""

    list_display = ['id', 'type', 'user', 'amount', 'fee', 'currency', 'status', 'created_at']
    list_filter = ['type', 'status', 'currency', 'payment_gateway', 'created_at']
    search_fields = ['user__email', 'description', 'gateway_transaction_id']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
