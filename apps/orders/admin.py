from django.contrib import admin
from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for orders.

    Orders are created through the commit pipeline, so everything except
    the status is read-only here.
    """

    list_display = [
        'uuid',
        'buyer',
        'seller',
        'group',
        'status',
        'order_total',
        'fulfillment_method',
        'order_date',
    ]

    list_filter = [
        'status',
        'fulfillment_method',
        'fulfillment_schedule_type',
        'order_date',
    ]

    search_fields = [
        'uuid',
        'request_token',
        'buyer__username',
        'seller__username',
        'seller_membership__merchant_name',
        'group__name',
    ]

    readonly_fields = [
        'uuid',
        'request_token',
        'buyer',
        'buyer_membership',
        'seller',
        'seller_membership',
        'group',
        'order_total',
        'items',
        'order_date',
        'updated_at',
    ]

    date_hierarchy = 'order_date'
    ordering = ['-order_date']

    fieldsets = (
        ('Parties', {
            'fields': ('uuid', 'request_token', 'buyer', 'buyer_membership', 'seller', 'seller_membership', 'group')
        }),
        ('Order', {
            'fields': ('status', 'order_total', 'items', 'special_instructions'),
        }),
        ('Fulfillment', {
            'fields': (
                'fulfillment_schedule_type',
                'fulfillment_date',
                'fulfillment_method',
                'fulfillment_details',
            ),
        }),
        ('Metadata', {
            'fields': ('order_date', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def has_add_permission(self, request):
        """Orders are only created through the API."""
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('buyer', 'seller', 'group', 'seller_membership')
