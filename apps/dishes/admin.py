from django.contrib import admin
from apps.dishes.models import Dish, DishPicture


class DishPictureInline(admin.TabularInline):
    """Inline admin for dish pictures."""
    model = DishPicture
    extra = 0
    fields = ['position', 'image_reference', 'description']


@admin.register(Dish)
class DishAdmin(admin.ModelAdmin):
    """Admin interface for dishes."""

    list_display = [
        'name',
        'merchant_name',
        'price',
        'spiciness_level',
        'is_published',
        'created_at'
    ]
    list_filter = [
        'is_published',
        'created_at'
    ]
    search_fields = [
        'name',
        'short_description',
        'membership__merchant_name',
        'owner__username'
    ]
    readonly_fields = [
        'uuid',
        'created_at',
        'updated_at'
    ]
    inlines = [DishPictureInline]
    ordering = ['-created_at']

    @admin.display(description='Merchant', ordering='membership__merchant_name')
    def merchant_name(self, obj):
        return obj.membership.merchant_name

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner', 'membership')
