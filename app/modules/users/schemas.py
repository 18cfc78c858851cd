from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class UserProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    name: Optional[str] = None
    instrument: Optional[str] = None
    part: Optional[str] = None
    remarks: Optional[str] = None


class ProfileSetup(BaseModel):
    name: str


class RoleUpdate(BaseModel):
    role: str


class UserProfileResponse(BaseModel):
    id: str
    email: str = ""
    display_name: Optional[str] = ""
    name: Optional[str] = ""
    role: str = "User"
    instrument: Optional[str] = ""
    part: Optional[str] = ""
    remarks: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    profile: UserProfileResponse
    capabilities: List[str]
    needs_setup: bool
