from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MemberCreate(BaseModel):
    name: Optional[str] = None
    instrument: Optional[str] = None
    part: Optional[str] = ""
    remarks: Optional[str] = ""


class MemberUpdate(BaseModel):
    name: Optional[str] = None
    instrument: Optional[str] = None
    part: Optional[str] = None
    remarks: Optional[str] = None


class MemberResponse(BaseModel):
    id: str
    name: str
    instrument: str
    part: Optional[str] = ""
    remarks: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
