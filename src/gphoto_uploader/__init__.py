"""
gphoto_uploader - Upload local photos to Google Photos.

Refreshes an OAuth access token from a stored refresh token and uploads each
photo with the two-phase Google Photos protocol (raw bytes, then media item
creation).
"""

__version__ = "0.1.0"

from gphoto_uploader.config import Credentials, Settings, load_credentials
from gphoto_uploader.exceptions import AuthError, GooglePhotosError, UploadError
from gphoto_uploader.google_photos import PhotoUploader, TokenManager
from gphoto_uploader.photos import PhotoAsset

__all__ = [
    "__version__",
    "Settings",
    "Credentials",
    "load_credentials",
    "TokenManager",
    "PhotoUploader",
    "PhotoAsset",
    "GooglePhotosError",
    "AuthError",
    "UploadError",
]
