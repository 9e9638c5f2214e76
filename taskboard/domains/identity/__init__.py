from taskboard.domains.identity.entities import User, ExternalIdentity
from taskboard.domains.identity.schemas import (
    GoogleLoginRequest, UserProfile, LoginResponse, DarkModeUpdate, DarkModeResponse
)

__all__ = [
    "User", "ExternalIdentity",
    "GoogleLoginRequest", "UserProfile", "LoginResponse", "DarkModeUpdate", "DarkModeResponse",
]
