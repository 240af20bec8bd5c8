from django.contrib import admin
from apps.merchant_groups.models import MerchantGroup, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    """Inline admin for group memberships."""
    model = GroupMembership
    extra = 0
    fields = ['user', 'merchant_name', 'credits', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(MerchantGroup)
class MerchantGroupAdmin(admin.ModelAdmin):
    """Admin interface for merchant groups."""

    list_display = [
        'name',
        'owner',
        'member_count',
        'is_public',
        'credits_name',
        'created_at'
    ]
    list_filter = ['is_public', 'created_at']
    search_fields = ['name', 'description', 'owner__username']
    readonly_fields = ['uuid', 'created_at', 'updated_at']
    inlines = [GroupMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('uuid', 'name', 'description', 'owner', 'is_public')
        }),
        ('Credits', {
            'fields': ('credits_name', 'default_credit_amount')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Members')
    def member_count(self, obj):
        return obj.memberships.count()


@admin.register(GroupMembership)
class GroupMembershipAdmin(admin.ModelAdmin):
    """Admin interface for group memberships."""

    list_display = ['merchant_name', 'user', 'group', 'credits', 'joined_at']
    list_filter = ['joined_at']
    search_fields = ['merchant_name', 'user__username', 'group__name']
    readonly_fields = ['uuid', 'joined_at']
    date_hierarchy = 'joined_at'
    ordering = ['-joined_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')
