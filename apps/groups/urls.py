from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                          - List user's groups
    # POST   /api/groups/                          - Create group
    # GET    /api/groups/{id}/                     - Get group details
    # PUT    /api/groups/{id}/                     - Update group (creator)
    # PATCH  /api/groups/{id}/                     - Partial update (creator)
    # DELETE /api/groups/{id}/                     - Delete group (creator)

    # Custom group actions
    # POST   /api/groups/{id}/members/             - Add member (creator)
    # DELETE /api/groups/{id}/members/{member_id}/ - Remove member (creator)
    # GET    /api/groups/{id}/balances/            - Member balances

    path('', include(router.urls)),
]
