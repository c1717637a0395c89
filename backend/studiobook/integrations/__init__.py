from .profile_api_client import ProfileApiClient, ProfileApiError

__all__ = ["ProfileApiClient", "ProfileApiError"]
