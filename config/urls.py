"""
URL configuration for the Golf Bag project.

    /api/auth/         - JWT tokens and current golfer
    /api/clubs/        - Bag inventory, archive and replacement advice
    /api/bag-changes/  - Replacements, change ledger and undo
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),

    # API endpoints
    path('api/clubs/', include('apps.clubs.urls')),
    path('api/bag-changes/', include('apps.bag_changes.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
