import logging
from datetime import datetime
from supabase import Client
from app.config.permissions_config import DEFAULT_ROLE, is_valid_role
from app.modules.users.schemas import UserProfileUpdate, UserProfileResponse
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def member_display_name(profile: UserProfileResponse) -> str:
    """Chosen name, else identity-provider name, else the email's local part."""
    if profile.name:
        return profile.name
    if profile.display_name:
        return profile.display_name
    return (profile.email or "").split("@")[0]


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[UserProfileResponse]:
        """Get user profile by ID, or None"""
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                return None

            return UserProfileResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_by_id(self, user_id: str) -> UserProfileResponse:
        """Get user profile by ID"""
        profile = self.get_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="User not found")
        return profile

    def ensure_profile(self, user_data: Dict[str, Any]) -> UserProfileResponse:
        """Return the caller's profile, creating it with the default role on first sign-in"""
        profile = self.get_profile(user_data["id"])
        if profile is not None:
            return profile
        try:
            metadata = user_data.get("user_metadata") or {}
            now = datetime.utcnow().isoformat()
            result = self.supabase.table("user_profiles").insert({
                "id": user_data["id"],
                "email": user_data.get("email") or "",
                "display_name": metadata.get("full_name") or metadata.get("name") or "",
                "name": "",
                "role": DEFAULT_ROLE,
                "instrument": "",
                "part": "",
                "remarks": "",
                "created_at": now,
                "updated_at": now,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user profile")

            logger.info(f"Created profile for user {user_data['id']} with role {DEFAULT_ROLE}")
            return UserProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating profile {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_users(self) -> List[UserProfileResponse]:
        """List all user profiles"""
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .order("created_at")\
                .execute()
            return [UserProfileResponse(**user) for user in result.data or []]
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _update(self, user_id: str, update_data: dict) -> UserProfileResponse:
        # Existence is checked first so a missing user is a 404, not an empty update
        self.get_user_by_id(user_id)
        try:
            update_data["updated_at"] = datetime.utcnow().isoformat()
            result = self.supabase.table("user_profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, user_data: UserProfileUpdate) -> UserProfileResponse:
        """Update profile fields. Fields left as None are untouched; empty strings are stored."""
        update_data = {}
        if user_data.display_name is not None:
            update_data["display_name"] = user_data.display_name
        if user_data.name is not None:
            update_data["name"] = user_data.name
        if user_data.instrument is not None:
            update_data["instrument"] = user_data.instrument
        if user_data.part is not None:
            update_data["part"] = user_data.part
        if user_data.remarks is not None:
            update_data["remarks"] = user_data.remarks
        return self._update(user_id, update_data)

    def setup_profile(self, user_id: str, name: str) -> UserProfileResponse:
        """Set the member's chosen name"""
        name = (name or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        return self._update(user_id, {"name": name})

    def update_role(self, user_id: str, role: str) -> UserProfileResponse:
        """Change a user's role"""
        if not is_valid_role(role):
            raise HTTPException(status_code=400, detail="Invalid role")
        profile = self._update(user_id, {"role": role})
        logger.info(f"Role of user {user_id} set to {role}")
        return profile
