from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import MerchantGroup
from .serializers import (
    MerchantGroupSerializer,
    MerchantGroupCreateSerializer,
    MerchantGroupUpdateSerializer,
    MerchantGroupListSerializer,
    GroupMemberSerializer,
    MyMembershipSerializer,
    MemberReferenceSerializer,
    VisibilitySerializer,
    MerchantNameSerializer,
)
from .permissions import IsGroupOwner, IsGroupMemberOrPublic

from apps.merchant_groups.services import (
    create_group,
    update_group,
    set_group_visibility,
    delete_group,
    list_visible_groups,
    get_groups_of_user,
    add_member,
    remove_member,
    get_group_members,
    update_merchant_name,
    resolve_membership,
    # Exceptions
    MerchantGroupNotFoundError,
    GroupNameTakenError,
    AlreadyMemberError,
    NotMemberError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
    UserNotFoundError,
    MembershipNotFoundError,
    HasOrdersError,
)


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class MerchantGroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for merchant group operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Public groups and groups the user belongs to
    create: Create a new group (creator becomes owner and first member)
    retrieve: Get a group (member or public)
    partial_update: Update name, description, credit settings (owner only)
    destroy: Delete a group (owner only)
    """

    queryset = MerchantGroup.objects.select_related('owner')
    serializer_class = MerchantGroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_field = 'uuid'
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action == 'list':
            return list_visible_groups(user=self.request.user)
        return MerchantGroup.objects.select_related('owner')

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return MerchantGroupListSerializer
        elif self.action == 'create':
            return MerchantGroupCreateSerializer
        elif self.action == 'partial_update':
            return MerchantGroupUpdateSerializer
        return MerchantGroupSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['partial_update', 'destroy']:
            return [IsAuthenticated(), IsGroupOwner()]
        if self.action == 'retrieve':
            return [IsAuthenticated(), IsGroupMemberOrPublic()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = create_group(owner=request.user, **serializer.validated_data)
        except GroupNameTakenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = MerchantGroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        """Update group settings (owner only)."""
        group = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = update_group(
                group_uuid=group.uuid,
                user=request.user,
                **serializer.validated_data
            )
        except GroupNameTakenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(MerchantGroupSerializer(group, context={'request': request}).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a group."""
        group = self.get_object()
        try:
            delete_group(group_uuid=group.uuid, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except HasOrdersError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def members(self, request, uuid=None):
        """Get all members of the group."""
        try:
            memberships = get_group_members(group_uuid=uuid, user=request.user)
        except MerchantGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        serializer = GroupMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['get'])
    def membership(self, request, uuid=None):
        """Get the caller's own membership, including credit balance."""
        group = self.get_object()
        try:
            membership = resolve_membership(user_id=request.user.pk, group_id=group.pk)
        except MembershipNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(MyMembershipSerializer(membership).data)

    @action(detail=True, methods=['post'])
    def add_member(self, request, uuid=None):
        """Add a user to the group (owner only)."""
        serializer = MemberReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = add_member(
                group_uuid=uuid,
                user_uuid=serializer.validated_data['user_uuid'],
                added_by=request.user
            )
        except (MerchantGroupNotFoundError, UserNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['delete'])
    def remove_member(self, request, uuid=None):
        """Remove a member from the group (owner only)."""
        serializer = MemberReferenceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_member(
                group_uuid=uuid,
                user_uuid=serializer.validated_data['user_uuid'],
                removed_by=request.user
            )
        except (MerchantGroupNotFoundError, UserNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (CannotRemoveOwnerError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except HasOrdersError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def visibility(self, request, uuid=None):
        """Make the group public or private (owner only)."""
        serializer = VisibilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = set_group_visibility(
                group_uuid=uuid,
                user=request.user,
                is_public=serializer.validated_data['is_public']
            )
        except MerchantGroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({'uuid': str(group.uuid), 'is_public': group.is_public})

    @action(detail=True, methods=['post'])
    def merchant_name(self, request, uuid=None):
        """Rename the caller's store in this group."""
        serializer = MerchantNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = update_merchant_name(
                group_uuid=uuid,
                user=request.user,
                merchant_name=serializer.validated_data['merchant_name']
            )
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(MyMembershipSerializer(membership).data)


@extend_schema(
    responses={200: MerchantGroupListSerializer(many=True)},
    description="Get all groups where the current user is a member.",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_groups(request):
    """Get all groups where user is a member."""
    groups = get_groups_of_user(user_uuid=request.user.uuid)
    serializer = MerchantGroupListSerializer(groups, many=True, context={'request': request})
    return Response(serializer.data)


@extend_schema(
    responses={200: MerchantGroupListSerializer(many=True)},
    description="Get all groups a given user belongs to.",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_groups(request, user_uuid):
    """Get all groups of another user."""
    try:
        groups = get_groups_of_user(user_uuid=user_uuid)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    serializer = MerchantGroupListSerializer(groups, many=True, context={'request': request})
    return Response(serializer.data)
