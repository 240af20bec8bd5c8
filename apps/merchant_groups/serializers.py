from rest_framework import serializers
from .models import MerchantGroup, GroupMembership
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['uuid', 'username', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class MerchantGroupSerializer(serializers.ModelSerializer):
    """Main serializer for merchant groups."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    my_membership = serializers.SerializerMethodField()

    class Meta:
        model = MerchantGroup
        fields = [
            'uuid',
            'name',
            'description',
            'is_public',
            'credits_name',
            'default_credit_amount',
            'owner',
            'member_count',
            'my_membership',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of members in the group."""
        return obj.memberships.count()

    def get_my_membership(self, obj):
        """Token of the current user's membership, if any."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            membership = obj.memberships.filter(user=request.user).first()
            if membership:
                return str(membership.uuid)
        return None


class MerchantGroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    # Uniqueness is checked by the service
    name = serializers.CharField(max_length=200)

    class Meta:
        model = MerchantGroup
        fields = ['name', 'description', 'is_public', 'credits_name', 'default_credit_amount']
        extra_kwargs = {
            'credits_name': {'required': False},
        }


class MerchantGroupUpdateSerializer(serializers.Serializer):
    """Partial update of group settings."""

    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    credits_name = serializers.CharField(max_length=50, required=False)
    default_credit_amount = serializers.IntegerField(min_value=0, required=False)


class MerchantGroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    owner = UserMinimalSerializer(read_only=True)

    class Meta:
        model = MerchantGroup
        fields = [
            'uuid',
            'name',
            'description',
            'is_public',
            'owner',
            'created_at',
        ]
        read_only_fields = fields


class GroupMemberSerializer(serializers.ModelSerializer):
    """Member information as seen by other members."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['uuid', 'user', 'merchant_name', 'joined_at']
        read_only_fields = fields


class MyMembershipSerializer(serializers.ModelSerializer):
    """The caller's own membership, including the credit balance."""

    group = serializers.UUIDField(source='group.uuid', read_only=True)
    credits_name = serializers.CharField(source='group.credits_name', read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['uuid', 'group', 'merchant_name', 'credits', 'credits_name', 'joined_at']
        read_only_fields = fields


class MemberReferenceSerializer(serializers.Serializer):
    """Body for add/remove member actions."""

    user_uuid = serializers.UUIDField()


class VisibilitySerializer(serializers.Serializer):
    is_public = serializers.BooleanField()


class MerchantNameSerializer(serializers.Serializer):
    merchant_name = serializers.CharField(max_length=200)
