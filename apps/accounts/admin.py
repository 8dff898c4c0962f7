# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for accounts, subscription state and usage."""

    list_display = [
        'email',
        'name',
        'country',
        'plan',
        'subscription_status',
        'current_period_end',
        'groups_created',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'plan',
        'subscription_status',
        'country',
        'is_active',
        'is_staff',
        'email_verified',
    ]

    search_fields = ['email', 'name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'password', 'avatar', 'currency', 'country')
        }),
        ('Subscription', {
            'fields': ('plan', 'subscription_status', 'current_period_end'),
        }),
        ('Usage', {
            'fields': ('groups_created', 'members_added', 'total_expenses', 'usage_last_reset'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Verification', {
            'fields': ('email_verified', 'verification_code'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'country', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login']

    filter_horizontal = ['groups', 'user_permissions']
