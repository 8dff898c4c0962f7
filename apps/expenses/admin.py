from django.contrib import admin
from apps.expenses.models import Expense, Participant


class ParticipantInline(admin.TabularInline):
    """Inline admin for participant shares."""
    model = Participant
    extra = 0
    fields = ['user', 'share', 'paid', 'settled_at']
    readonly_fields = ['paid', 'settled_at']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['description', 'amount', 'currency', 'category', 'paid_by', 'group', 'is_settled', 'date']
    list_filter = ['category', 'split_type', 'is_settled', 'date']
    search_fields = ['description', 'paid_by__email', 'group__name']
    readonly_fields = ['is_settled', 'created_at', 'updated_at']
    raw_id_fields = ['paid_by', 'group']
    inlines = [ParticipantInline]
    date_hierarchy = 'date'
    ordering = ['-date', '-created_at']
