from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    OrderRequestSerializer,
    PlaceOrderSerializer,
    StatusChangeSerializer,
    OrderHistoryQuerySerializer,
    OrderSerializer,
)
from .services import (
    OrderCommitPipeline,
    OrderRequest,
    transition_order_status,
    get_customer_orders,
    get_merchant_orders,
    get_order_details,
    OrdersServiceError,
    ResourceNotFoundError,
    OrderPermissionError,
    OrderValidationError,
    DuplicateOrderRequestError,
    CatalogUnavailableError,
)


def _error_response(exc: OrdersServiceError) -> Response:
    """Map a service exception to the HTTP status of its category."""
    if isinstance(exc, ResourceNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, OrderPermissionError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, OrderValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, DuplicateOrderRequestError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, CatalogUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response({'error': str(exc)}, status=code)


def _history_days(request):
    query = OrderHistoryQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data.get('days')


@extend_schema(
    request=OrderRequestSerializer,
    description="Validate an order and price it without placing it.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def validate_order(request):
    """Dry run of order placement."""
    serializer = OrderRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        preview = OrderCommitPipeline().validate(
            caller=request.user,
            order_request=OrderRequest.from_payload(serializer.validated_data),
        )
    except OrdersServiceError as e:
        return _error_response(e)

    return Response(preview)


@extend_schema(
    request=PlaceOrderSerializer,
    description="Place an order. Repeating a request token returns the original order.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def place_order(request):
    """Place an order exactly once per request token."""
    serializer = PlaceOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        order, created = OrderCommitPipeline().place(
            caller=request.user,
            request_token=serializer.validated_data['request_token'],
            order_request=OrderRequest.from_payload(serializer.validated_data['order']),
        )
    except OrdersServiceError as e:
        return _error_response(e)

    return Response(order, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@extend_schema(
    parameters=[OpenApiParameter('days', int, description='Look-back window in days')],
    responses={200: OrderSerializer(many=True)},
    description="Orders the current user placed.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def customer_orders(request):
    """Orders placed by the current user."""
    orders = get_customer_orders(user=request.user, days=_history_days(request))
    return Response(OrderSerializer(orders, many=True).data)


@extend_schema(
    parameters=[OpenApiParameter('days', int, description='Look-back window in days')],
    responses={200: OrderSerializer(many=True)},
    description="Orders the current user received as a seller.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def merchant_orders(request):
    """Orders received by the current user."""
    orders = get_merchant_orders(user=request.user, days=_history_days(request))
    return Response(OrderSerializer(orders, many=True).data)


@extend_schema(
    responses={200: OrderSerializer},
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def order_detail(request, order_uuid):
    """Get an order; only its buyer and seller may see it."""
    try:
        order = get_order_details(order_uuid=order_uuid, user=request.user)
    except OrdersServiceError as e:
        return _error_response(e)

    return Response(OrderSerializer(order).data)


@extend_schema(
    request=StatusChangeSerializer,
    responses={200: OrderSerializer},
    description="Move an order along its lifecycle. Buyers may only cancel.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_order_status(request, order_uuid):
    """Apply a status transition."""
    serializer = StatusChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        order = transition_order_status(
            order_uuid=order_uuid,
            user=request.user,
            requested_status=serializer.validated_data['order_status'],
        )
    except OrdersServiceError as e:
        return _error_response(e)

    return Response(OrderSerializer(order).data)
