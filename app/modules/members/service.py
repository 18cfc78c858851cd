import logging
from datetime import datetime
from supabase import Client
from app.modules.members.schemas import MemberCreate, MemberUpdate, MemberResponse
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class MemberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_members(self) -> List[MemberResponse]:
        """List all members"""
        try:
            result = self.supabase.table("members")\
                .select("*")\
                .order("name")\
                .execute()
            return [MemberResponse(**member) for member in result.data or []]
        except Exception as e:
            logger.error(f"Error listing members: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_member(self, member_id: str) -> MemberResponse:
        """Get member by ID"""
        try:
            result = self.supabase.table("members")\
                .select("*")\
                .eq("id", member_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_member(self, member_data: MemberCreate) -> MemberResponse:
        """Create a member; name and instrument are required"""
        name = (member_data.name or "").strip()
        instrument = (member_data.instrument or "").strip()
        if not name or not instrument:
            raise HTTPException(status_code=400, detail="Name and instrument are required")
        try:
            now = datetime.utcnow().isoformat()
            result = self.supabase.table("members").insert({
                "name": name,
                "instrument": instrument,
                "part": member_data.part or "",
                "remarks": member_data.remarks or "",
                "created_at": now,
                "updated_at": now,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create member")

            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating member {name}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_member(self, member_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Update member"""
        update_data = {"updated_at": datetime.utcnow().isoformat()}
        if member_data.name is not None:
            update_data["name"] = member_data.name
        if member_data.instrument is not None:
            update_data["instrument"] = member_data.instrument
        if member_data.part is not None:
            update_data["part"] = member_data.part
        if member_data.remarks is not None:
            update_data["remarks"] = member_data.remarks
        try:
            result = self.supabase.table("members")\
                .update(update_data)\
                .eq("id", member_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            return MemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_member(self, member_id: str) -> bool:
        """Delete member"""
        try:
            result = self.supabase.table("members")\
                .delete()\
                .eq("id", member_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting member {member_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
