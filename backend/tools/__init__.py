"""
Integrations for the Profile Directory.

- google_oauth: Google sign-in (authorization-code flow)
- image_storage: Profile photo storage on local disk
"""

from backend.tools.google_oauth import GoogleOAuthClient, OAuthError, get_oauth_client
from backend.tools.image_storage import ImageStorage, StorageError, get_image_storage

__all__ = [
    "GoogleOAuthClient",
    "OAuthError",
    "get_oauth_client",
    "ImageStorage",
    "StorageError",
    "get_image_storage",
]
