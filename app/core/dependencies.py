"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import role_can
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import UserService
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_current_profile(
    user_data: dict = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
) -> UserProfileResponse:
    """Profile of the authenticated user, created with the default role on first sign-in"""
    return user_service.ensure_profile(user_data)


def can_access_user(profile: UserProfileResponse, target_user_id: str) -> bool:
    """True if target is self or the caller may manage member records"""
    return profile.id == target_user_id or role_can(profile.role, "members:access")


def require_capability(required_capability: str):
    """Factory function to create role capability check dependency"""
    def check_capability(
        profile: UserProfileResponse = Depends(get_current_profile)
    ) -> UserProfileResponse:
        """Dependency to check if the user's role grants the capability"""
        if not role_can(profile.role, required_capability):
            logger.info(f"User {profile.id} ({profile.role}) denied {required_capability}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_capability}"
            )
        return profile
    return check_capability
