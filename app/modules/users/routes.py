from fastapi import APIRouter, Depends, HTTPException, status
from app.modules.users.schemas import (
    UserProfileUpdate, UserProfileResponse, ProfileSetup, RoleUpdate
)
from app.modules.users.service import UserService
from app.core.dependencies import (
    get_current_profile, get_user_service, require_capability, can_access_user
)
from app.config.permissions_config import get_capability_matrix
from typing import List

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserProfileResponse])
async def list_users(
    profile: UserProfileResponse = Depends(require_capability("dashboard:access")),
    service: UserService = Depends(get_user_service)
):
    """List all user profiles (members of the orchestra)"""
    return service.list_users()


@router.get("/me", response_model=UserProfileResponse)
async def get_my_profile(
    profile: UserProfileResponse = Depends(get_current_profile)
):
    """Get the caller's profile"""
    return profile


@router.put("/me", response_model=UserProfileResponse)
async def update_my_profile(
    body: UserProfileUpdate,
    profile: UserProfileResponse = Depends(get_current_profile),
    service: UserService = Depends(get_user_service)
):
    """Update the caller's profile fields (instrument, part, remarks, names)"""
    return service.update_profile(profile.id, body)


@router.post("/me/setup", response_model=UserProfileResponse)
async def setup_my_profile(
    body: ProfileSetup,
    profile: UserProfileResponse = Depends(get_current_profile),
    service: UserService = Depends(get_user_service)
):
    """Set the caller's chosen name (first sign-in)"""
    return service.setup_profile(profile.id, body.name)


@router.get("/roles")
async def get_role_matrix(
    profile: UserProfileResponse = Depends(require_capability("roles:manage"))
):
    """Roles and the capabilities each grants (role management screen)"""
    return get_capability_matrix()


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: str,
    profile: UserProfileResponse = Depends(get_current_profile),
    service: UserService = Depends(get_user_service)
):
    """Get user by ID (self, or Admin and above)"""
    if not can_access_user(profile, user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not accessible")
    return service.get_user_by_id(user_id)


@router.put("/{user_id}", response_model=UserProfileResponse)
async def update_user(
    user_id: str,
    body: UserProfileUpdate,
    profile: UserProfileResponse = Depends(get_current_profile),
    service: UserService = Depends(get_user_service)
):
    """Update user profile (self, or Admin and above)"""
    if not can_access_user(profile, user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not accessible")
    return service.update_profile(user_id, body)


@router.patch("/{user_id}/role", response_model=UserProfileResponse)
async def update_user_role(
    user_id: str,
    body: RoleUpdate,
    profile: UserProfileResponse = Depends(require_capability("roles:manage")),
    service: UserService = Depends(get_user_service)
):
    """Change a user's role (SuperAdmin only, never your own)"""
    if user_id == profile.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot change your own role")
    return service.update_role(user_id, body.role)
