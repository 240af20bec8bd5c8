from django.db import models
from django.core.validators import MinValueValidator
import uuid


class Dish(models.Model):
    """A dish listed by a seller membership."""

    uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='dishes')
    membership = models.ForeignKey(
        'merchant_groups.GroupMembership',
        on_delete=models.CASCADE,
        related_name='dishes'
    )
    name = models.CharField(max_length=255)
    short_description = models.TextField(blank=True)
    description = models.TextField(blank=True)
    price = models.PositiveIntegerField()
    spiciness_level = models.FloatField(default=0.0, validators=[MinValueValidator(0.0)])
    is_published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'dishes'
        verbose_name_plural = 'dishes'
        indexes = [
            models.Index(fields=['membership', 'created_at'], name='dishes_membership_created_idx'),
            models.Index(fields=['owner'], name='dishes_owner_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.membership.merchant_name})"


class DishPicture(models.Model):
    """Ordered picture reference attached to a dish."""

    dish = models.ForeignKey(Dish, on_delete=models.CASCADE, related_name='pictures')
    image_reference = models.CharField(max_length=500)
    description = models.CharField(max_length=255, blank=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'dish_pictures'
        indexes = [
            models.Index(fields=['dish', 'position'], name='dish_pictures_dish_pos_idx'),
        ]
        ordering = ['position']

    def __str__(self):
        return f"{self.dish.name} #{self.position}"
