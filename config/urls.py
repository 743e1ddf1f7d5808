# config/urls.py

"""
Root URL configuration for the overlay composition service.

    /api/videos     - List and compose overlay videos
    /api/health     - Cloudinary connectivity check
"""

from django.urls import path, include

urlpatterns = [
    path('api/', include('apps.api.urls', namespace='api')),
]
