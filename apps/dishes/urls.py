from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'dishes'

router = DefaultRouter()
router.register(r'', views.DishViewSet, basename='dish')

urlpatterns = [
    # Dish ViewSet routes
    # GET    /api/dishes/                          - Dishes visible to caller
    # POST   /api/dishes/                          - Create dish
    # GET    /api/dishes/{uuid}/                   - Get dish (owner or group member)
    # PATCH  /api/dishes/{uuid}/                   - Update dish (owner)
    # DELETE /api/dishes/{uuid}/                   - Remove dish (owner)

    # Custom actions
    # POST   /api/dishes/{uuid}/pictures/          - Add picture reference (owner)
    # DELETE /api/dishes/{uuid}/pictures/{index}/  - Remove picture (owner)

    # Additional endpoints
    path('memberships/<uuid:membership_uuid>/', views.membership_dishes, name='membership-dishes'),

    # Include router URLs
    path('', include(router.urls)),
]
