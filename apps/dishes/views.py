from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Dish
from .permissions import CanViewDish, CanEditDish
from .serializers import (
    DishSerializer,
    DishListSerializer,
    DishCreateSerializer,
    DishUpdateSerializer,
    DishPictureSerializer,
)
from .services import (
    dish_permission,
    create_dish,
    list_dishes_for_membership,
    list_visible_dishes,
    update_dish,
    remove_dish,
    add_dish_picture,
    remove_dish_picture,
    DishNotFoundError,
    DishPermissionDeniedError,
    InvalidDishDataError,
    PictureNotFoundError,
)


class DishPagination(PageNumberPagination):
    """Custom pagination for dishes."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class DishViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Dish operations.

    list: Dishes visible to the caller across their groups
    create: List a new dish under one of the caller's memberships
    retrieve: Get a dish (owner or group member)
    partial_update: Update dish fields (owner only)
    destroy: Remove a dish (owner only)
    """

    queryset = Dish.objects.select_related('membership__group').prefetch_related('pictures')
    serializer_class = DishSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = DishPagination
    lookup_field = 'uuid'
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action == 'list':
            return list_visible_dishes(user=self.request.user)
        return super().get_queryset()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return DishListSerializer
        elif self.action == 'create':
            return DishCreateSerializer
        elif self.action == 'partial_update':
            return DishUpdateSerializer
        return DishSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['partial_update', 'destroy', 'pictures', 'remove_picture']:
            return [IsAuthenticated(), CanEditDish()]
        if self.action == 'retrieve':
            return [IsAuthenticated(), CanViewDish()]
        return [IsAuthenticated()]

    def _detail_response(self, dish, status_code=status.HTTP_200_OK):
        permission = dish_permission(user_id=self.request.user.pk, dish=dish)
        serializer = DishSerializer(dish, context={'request': self.request, 'permission': permission.value})
        return Response(serializer.data, status=status_code)

    def create(self, request, *args, **kwargs):
        """List a new dish."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dish = create_dish(user=request.user, **serializer.validated_data)
        except DishPermissionDeniedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidDishDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._detail_response(dish, status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        """Get a dish."""
        return self._detail_response(self.get_object())

    def partial_update(self, request, *args, **kwargs):
        """Update dish fields."""
        dish = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dish = update_dish(dish_uuid=dish.uuid, user=request.user, **serializer.validated_data)
        except DishPermissionDeniedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidDishDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return self._detail_response(dish)

    def destroy(self, request, *args, **kwargs):
        """Remove a dish."""
        dish = self.get_object()
        try:
            remove_dish(dish_uuid=dish.uuid, user=request.user)
        except DishNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DishPermissionDeniedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def pictures(self, request, uuid=None):
        """Attach a picture reference to the dish."""
        dish = self.get_object()
        serializer = DishPictureSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            picture = add_dish_picture(dish_uuid=dish.uuid, user=request.user, **serializer.validated_data)
        except DishPermissionDeniedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidDishDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DishPictureSerializer(picture).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['delete'], url_path=r'pictures/(?P<index>\d+)')
    def remove_picture(self, request, uuid=None, index=None):
        """Remove the picture at a position."""
        dish = self.get_object()
        try:
            remove_dish_picture(dish_uuid=dish.uuid, user=request.user, index=int(index))
        except PictureNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DishPermissionDeniedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: DishListSerializer(many=True)},
    description="List the dishes a seller membership offers.",
    tags=['dishes'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def membership_dishes(request, membership_uuid):
    """Dishes of one seller; the caller must share the seller's group."""
    try:
        dishes = list_dishes_for_membership(membership_token=membership_uuid, user=request.user)
    except DishNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except DishPermissionDeniedError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(DishListSerializer(dishes, many=True).data)
