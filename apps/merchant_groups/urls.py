from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'merchant_groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.MerchantGroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                 - List visible groups
    # POST   /api/groups/                 - Create group
    # GET    /api/groups/{uuid}/          - Get group details
    # PATCH  /api/groups/{uuid}/          - Update settings (owner)
    # DELETE /api/groups/{uuid}/          - Delete group (owner)

    # Custom group actions
    # GET    /api/groups/{uuid}/members/        - List members
    # GET    /api/groups/{uuid}/membership/     - Caller's membership and credits
    # POST   /api/groups/{uuid}/add_member/     - Add member (owner)
    # DELETE /api/groups/{uuid}/remove_member/  - Remove member (owner)
    # POST   /api/groups/{uuid}/visibility/     - Public/private (owner)
    # POST   /api/groups/{uuid}/merchant_name/  - Rename caller's store

    # Additional endpoints
    path('my/', views.my_groups, name='my-groups'),
    path('users/<uuid:user_uuid>/', views.user_groups, name='user-groups'),

    # Include router URLs
    path('', include(router.urls)),
]
