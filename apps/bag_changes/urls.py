from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'bag_changes'

router = DefaultRouter()
router.register(r'', views.ChangeRecordViewSet, basename='change')

urlpatterns = [
    # GET  /api/bag-changes/            - Change history
    # GET  /api/bag-changes/{id}/       - Change detail
    # POST /api/bag-changes/apply/      - Apply replacement
    # POST /api/bag-changes/{id}/undo/  - Undo change
    path('', include(router.urls)),
]
