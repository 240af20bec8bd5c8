from rest_framework import serializers
from .models import Dish, DishPicture


class DishPictureSerializer(serializers.ModelSerializer):
    """Ordered picture reference."""

    class Meta:
        model = DishPicture
        fields = ['position', 'image_reference', 'description']
        read_only_fields = ['position']


class DishSerializer(serializers.ModelSerializer):
    """Main serializer for dishes."""

    pictures = DishPictureSerializer(many=True, read_only=True)
    membership = serializers.UUIDField(source='membership.uuid', read_only=True)
    merchant_name = serializers.CharField(source='membership.merchant_name', read_only=True)
    group = serializers.UUIDField(source='membership.group.uuid', read_only=True)
    permission = serializers.SerializerMethodField()

    class Meta:
        model = Dish
        fields = [
            'uuid',
            'membership',
            'merchant_name',
            'group',
            'name',
            'short_description',
            'description',
            'price',
            'spiciness_level',
            'is_published',
            'pictures',
            'permission',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_permission(self, obj):
        """Caller's access level, as computed by the view."""
        return self.context.get('permission')


class DishListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Dish
        fields = [
            'uuid',
            'name',
            'short_description',
            'price',
            'spiciness_level',
            'is_published',
        ]
        read_only_fields = fields


class DishCreateSerializer(serializers.Serializer):
    """Serializer for listing a new dish."""

    membership_token = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    short_description = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.IntegerField(min_value=0)
    spiciness_level = serializers.FloatField(min_value=0.0, required=False)
    is_published = serializers.BooleanField(required=False)


class DishUpdateSerializer(serializers.Serializer):
    """Partial update of dish fields."""

    name = serializers.CharField(max_length=255, required=False)
    short_description = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.IntegerField(min_value=0, required=False)
    spiciness_level = serializers.FloatField(min_value=0.0, required=False)
    is_published = serializers.BooleanField(required=False)
