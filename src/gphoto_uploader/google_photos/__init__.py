"""
Google Photos API integration.

Provides access token management and the two-phase media upload.
"""

from gphoto_uploader.google_photos.api import MediaItemResult, PhotoUploader
from gphoto_uploader.google_photos.auth import AccessToken, TokenManager

__all__ = [
    "AccessToken",
    "TokenManager",
    "PhotoUploader",
    "MediaItemResult",
]
