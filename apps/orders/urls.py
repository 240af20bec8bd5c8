from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    # POST /api/orders/validate/            - Validate and price an order
    # POST /api/orders/place/               - Place an order (idempotent per request_token)
    # GET  /api/orders/customer/?days=30    - Orders I placed
    # GET  /api/orders/merchant/?days=30    - Orders I received
    # GET  /api/orders/{uuid}/              - Order detail
    # POST /api/orders/{uuid}/status/       - Change order status
    path('validate/', views.validate_order, name='validate'),
    path('place/', views.place_order, name='place'),
    path('customer/', views.customer_orders, name='customer-orders'),
    path('merchant/', views.merchant_orders, name='merchant-orders'),
    path('<uuid:order_uuid>/', views.order_detail, name='order-detail'),
    path('<uuid:order_uuid>/status/', views.change_order_status, name='order-status'),
]
