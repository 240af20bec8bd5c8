from django.db import models
import uuid


class MerchantGroup(models.Model):
    """Marketplace group. Members trade dishes for the group's credits."""

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_merchant_groups')
    is_public = models.BooleanField(default=False)
    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    credits_name = models.CharField(max_length=50, default='Credits')
    default_credit_amount = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'merchant_groups'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='merchant_gr_owner_created_idx'),
            models.Index(fields=['is_public'], name='merchant_gr_is_public_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def is_owner(self, user):
        return self.owner_id == user.pk


class GroupMembership(models.Model):
    """
    A user's seat in a merchant group.

    The same row is the user's buyer identity (credits are spent from it)
    and seller identity (dishes are listed under it).
    """

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='merchant_memberships')
    group = models.ForeignKey(MerchantGroup, on_delete=models.CASCADE, related_name='memberships')
    merchant_name = models.CharField(max_length=200)
    credits = models.PositiveIntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'merchant_group_memberships'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['user', 'joined_at'], name='merchant_me_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.merchant_name} ({self.user.get_display_name()} in {self.group.name})"


def default_merchant_name(user):
    """Store name a new membership starts with."""
    return f"{user.get_display_name()}'s Store"
