from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'clubs'

router = DefaultRouter()
router.register(r'', views.ClubViewSet, basename='club')

urlpatterns = [
    # GET    /api/clubs/                        - List clubs (?status=archived)
    # POST   /api/clubs/                        - Add club to bag
    # GET    /api/clubs/{id}/                   - Get club
    # POST   /api/clubs/{id}/favorite/          - Set favorite club
    # GET    /api/clubs/archived/               - Archive snapshots
    # POST   /api/clubs/replacement-suggestion/ - Single vs. set recommendation
    path('', include(router.urls)),
]
