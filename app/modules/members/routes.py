from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.members.schemas import MemberCreate, MemberUpdate, MemberResponse
from app.modules.members.service import MemberService
from app.modules.users.schemas import UserProfileResponse
from app.core.dependencies import require_capability
from supabase import Client
from typing import List

router = APIRouter(prefix="/members", tags=["members"])


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


@router.get("", response_model=List[MemberResponse])
async def list_members(
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: MemberService = Depends(get_member_service)
):
    """List members"""
    return service.list_members()


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    member_data: MemberCreate,
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: MemberService = Depends(get_member_service)
):
    """Create a member (name and instrument required)"""
    return service.create_member(member_data)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: MemberService = Depends(get_member_service)
):
    """Get member by ID"""
    return service.get_member(member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    member_data: MemberUpdate,
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: MemberService = Depends(get_member_service)
):
    """Update member"""
    return service.update_member(member_id, member_data)


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: str,
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: MemberService = Depends(get_member_service)
):
    """Delete member"""
    service.delete_member(member_id)
    return None
