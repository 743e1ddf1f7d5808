# apps/api/__init__.py

"""
API layer for the overlay composition service.

This package provides REST API endpoints for:
- Listing the composited videos stored in Cloudinary
- Composing a new chroma-keyed overlay video
- Checking the Cloudinary connection
"""
