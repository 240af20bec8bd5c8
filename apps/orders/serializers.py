from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Order, OrderStatus


# =============================================================================
# Input Serializers
# =============================================================================

class OrderItemRequestSerializer(serializers.Serializer):
    """One cart line. Quantity range is checked by the order validator."""

    dish_token = serializers.UUIDField()
    quantity = serializers.IntegerField()
    special_instructions = serializers.CharField(required=False, allow_blank=True, default='')


class FulfillmentDetailsSerializer(serializers.Serializer):
    """Delivery contact details, all optional."""

    address = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    city = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    state = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    zip = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    phone = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class OrderRequestSerializer(serializers.Serializer):
    """
    Validate the shape of an order request.

    Schedule type, fulfillment method and date are kept as raw strings so
    the order validator can report them with its own messages.
    """

    seller_membership_token = serializers.UUIDField()
    special_instructions = serializers.CharField(required=False, allow_blank=True, default='')
    fulfillment_schedule_type = serializers.CharField(required=False, default='asap')
    fulfillment_date = serializers.CharField(required=False, allow_null=True, default=None)
    fulfillment_method = serializers.CharField(required=False, default='dine_in')
    fulfillment_details = FulfillmentDetailsSerializer(required=False, default=dict)
    items = OrderItemRequestSerializer(many=True, allow_empty=False)


class PlaceOrderSerializer(serializers.Serializer):
    """Order request plus the client's idempotency token."""

    request_token = serializers.UUIDField()
    order = OrderRequestSerializer()


class StatusChangeSerializer(serializers.Serializer):
    order_status = serializers.ChoiceField(choices=OrderStatus.choices)


class OrderHistoryQuerySerializer(serializers.Serializer):
    """Query parameters for order history."""

    days = serializers.IntegerField(min_value=1, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderSerializer(serializers.ModelSerializer):
    """Placed order as shown in history and detail views."""

    order_id = serializers.UUIDField(source='uuid', read_only=True)
    order_status = serializers.CharField(source='status', read_only=True)
    buyer = UserPublicSerializer(read_only=True)
    seller = UserPublicSerializer(read_only=True)
    seller_membership_token = serializers.UUIDField(source='seller_membership.uuid', read_only=True)
    seller_name = serializers.CharField(source='seller_membership.merchant_name', read_only=True)
    group = serializers.UUIDField(source='group.uuid', read_only=True)

    class Meta:
        model = Order
        fields = [
            'order_id',
            'order_date',
            'order_status',
            'buyer',
            'seller',
            'seller_membership_token',
            'seller_name',
            'group',
            'special_instructions',
            'fulfillment_schedule_type',
            'fulfillment_date',
            'fulfillment_method',
            'fulfillment_details',
            'items',
            'order_total',
            'updated_at',
        ]
        read_only_fields = fields
