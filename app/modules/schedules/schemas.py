from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime


class ScheduleUpsert(BaseModel):
    """Canonical schedule document written by the sync layer (camelCase on the wire)."""
    member_id: str
    member_name: str = ""
    available_days: List[str] = []
    available_dates: List[str] = []
    date_notes: Dict[str, str] = {}
    week_start_date: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScheduleResponse(BaseModel):
    id: Optional[str] = None
    member_id: str
    member_name: str = ""
    available_days: List[str] = []
    available_dates: List[str] = []
    date_notes: Dict[str, str] = {}
    week_start_date: str = ""
    updated_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ScheduleListResponse(BaseModel):
    schedules: List[ScheduleResponse]
    current_week: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScheduleBatchRequest(BaseModel):
    schedules: List[ScheduleUpsert]


class ScheduleBatchResponse(BaseModel):
    success: bool
    saved: List[str]
    failed: List[str] = []


class DateMarkRequest(BaseModel):
    dates: List[str]


class DateMemoRequest(BaseModel):
    memo: str = ""
