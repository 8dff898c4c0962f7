from django.contrib import admin
from apps.groups.models import Group, Member, GroupBalance


class MemberInline(admin.TabularInline):
    """Inline admin for group members."""
    model = Member
    extra = 0
    fields = ['name', 'email', 'user', 'is_active', 'joined_at']
    readonly_fields = ['joined_at']


class GroupBalanceInline(admin.TabularInline):
    model = GroupBalance
    extra = 0
    fields = ['user', 'balance', 'updated_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = ['name', 'created_by', 'currency', 'member_count', 'created_at']
    list_filter = ['currency', 'created_at']
    search_fields = ['name', 'description', 'created_by__email']
    readonly_fields = ['created_by', 'created_at', 'updated_at']
    inlines = [MemberInline, GroupBalanceInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.members.count()
    member_count.short_description = 'Members'


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'group', 'user', 'is_active', 'joined_at']
    list_filter = ['is_active', 'joined_at']
    search_fields = ['name', 'email', 'group__name']
    raw_id_fields = ['group', 'user']
