"""
URL configuration for the API layer.

Endpoints:
    Videos:
        - GET    /api/videos    - List videos uploaded to the managed folder
        - POST   /api/videos    - Compose a chroma-keyed overlay video

    Health & Monitoring:
        - GET    /api/health    - Cloudinary connectivity check

Both routes accept an optional trailing slash.
"""

from django.urls import re_path

from .views import HealthCheckView, VideosView

urlpatterns = [
    re_path(r'^videos/?$', VideosView.as_view(), name='videos'),
    re_path(r'^health/?$', HealthCheckView.as_view(), name='health-check'),
]

# App name for URL namespacing
# Allows using 'api:videos', 'api:health-check'
app_name = 'api'
