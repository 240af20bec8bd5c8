from django.db import models
import uuid


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'
    IN_PROGRESS = 'in_progress', 'In progress'
    SHIPPED = 'shipped', 'Shipped'
    READY_FOR_PICKUP = 'ready_for_pickup', 'Ready for pickup'
    DELIVERED = 'delivered', 'Delivered'
    PICKED_UP = 'picked_up', 'Picked up'
    CANCELLED = 'cancelled', 'Cancelled'


class FulfillmentScheduleType(models.TextChoices):
    ASAP = 'asap', 'As soon as possible'
    SCHEDULED = 'scheduled', 'Scheduled'


class FulfillmentMethod(models.TextChoices):
    DELIVERY = 'delivery', 'Delivery'
    PICKUP = 'pickup', 'Pickup'
    DINE_IN = 'dine_in', 'Dine in'


class Order(models.Model):
    """
    An order placed by one member with another member of the same group.

    Items are stored as priced snapshots, so later dish edits never change
    a placed order. Only status changes after creation.
    """

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    # Client-supplied idempotency token
    request_token = models.UUIDField(unique=True, editable=False)

    buyer = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='orders_placed')
    buyer_membership = models.ForeignKey(
        'merchant_groups.GroupMembership',
        on_delete=models.PROTECT,
        related_name='orders_as_buyer'
    )
    seller = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='orders_received')
    seller_membership = models.ForeignKey(
        'merchant_groups.GroupMembership',
        on_delete=models.PROTECT,
        related_name='orders_as_seller'
    )
    group = models.ForeignKey('merchant_groups.MerchantGroup', on_delete=models.PROTECT, related_name='orders')

    special_instructions = models.TextField(blank=True)
    order_date = models.DateTimeField(auto_now_add=True)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    order_total = models.PositiveIntegerField()

    fulfillment_schedule_type = models.CharField(
        max_length=20,
        choices=FulfillmentScheduleType.choices,
        default=FulfillmentScheduleType.ASAP
    )
    fulfillment_date = models.DateTimeField(null=True, blank=True)
    fulfillment_method = models.CharField(max_length=20, choices=FulfillmentMethod.choices)
    fulfillment_details = models.JSONField(default=dict, blank=True)
    items = models.JSONField(default=list)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['buyer', 'order_date'], name='orders_buyer_date_idx'),
            models.Index(fields=['seller', 'order_date'], name='orders_seller_date_idx'),
            models.Index(fields=['group', 'status'], name='orders_group_status_idx'),
        ]
        ordering = ['-order_date']

    def __str__(self):
        return f"Order {self.uuid} ({self.status})"

    def is_participant(self, user):
        return user.pk in (self.buyer_id, self.seller_id)
