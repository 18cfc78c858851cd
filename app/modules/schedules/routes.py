import logging
from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.config.permissions_config import role_can
from app.modules.calendar.grid import as_date_key, format_date, today
from app.modules.schedules.availability import AvailabilityStore
from app.modules.schedules.schemas import (
    ScheduleResponse, ScheduleListResponse, ScheduleBatchRequest, ScheduleBatchResponse,
    DateMarkRequest, DateMemoRequest
)
from app.modules.schedules.service import ScheduleService
from app.modules.schedules.sync import ScheduleSync
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import member_display_name
from app.core.dependencies import require_capability
from supabase import Client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["schedules"])


def get_schedule_service(supabase: Client = Depends(get_supabase)) -> ScheduleService:
    return ScheduleService(supabase)


def get_schedule_sync(service: ScheduleService = Depends(get_schedule_service)) -> ScheduleSync:
    return ScheduleSync(service)


def _empty_schedule(profile: UserProfileResponse) -> ScheduleResponse:
    return ScheduleResponse(member_id=profile.id, member_name=member_display_name(profile))


def _save(store: AvailabilityStore, sync: ScheduleSync) -> ScheduleResponse:
    result = sync.save(store)
    if result.schedule is not None:
        return result.schedule
    snapshot = store.snapshot()
    return ScheduleResponse(
        id=result.schedule_id,
        member_id=snapshot.member_id,
        member_name=snapshot.member_name,
        available_days=[] if snapshot.selected else snapshot.available_days,
        available_dates=snapshot.available_dates,
        date_notes=snapshot.date_notes,
        week_start_date=snapshot.week_start_date or "",
    )


@router.get("", response_model=ScheduleListResponse)
async def list_schedules(
    profile: UserProfileResponse = Depends(require_capability("dashboard:access")),
    service: ScheduleService = Depends(get_schedule_service)
):
    """List every member's schedule"""
    return ScheduleListResponse(
        schedules=service.list_schedules(),
        current_week=format_date(today()),
    )


@router.post("", response_model=ScheduleBatchResponse)
@router.put("", response_model=ScheduleBatchResponse)
async def save_schedules(
    body: ScheduleBatchRequest,
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    sync: ScheduleSync = Depends(get_schedule_sync)
):
    """Upsert one or more schedules. Members may only write their own; Admins may write any."""
    if not body.schedules:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Schedules array is required")
    for schedule in body.schedules:
        if not schedule.member_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Member ID is required")
        if schedule.member_id != profile.id and not role_can(profile.role, "members:access"):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only update your own schedule")

    result = sync.save_many(body.schedules)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update schedules for members: {', '.join(result.failed)}"
        )
    return ScheduleBatchResponse(success=True, saved=result.saved)


@router.get("/me", response_model=ScheduleResponse)
async def get_my_schedule(
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    service: ScheduleService = Depends(get_schedule_service)
):
    """The caller's schedule, or an empty one if none was saved yet"""
    return service.find_schedule_by_member(profile.id) or _empty_schedule(profile)


@router.post("/me/dates/{date}/toggle", response_model=ScheduleResponse)
async def toggle_my_date(
    date: str,
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    service: ScheduleService = Depends(get_schedule_service),
    sync: ScheduleSync = Depends(get_schedule_sync)
):
    """Select the date, or deselect it and drop its memo"""
    key = as_date_key(date)
    store = service.load_store(profile.id, member_display_name(profile))
    store.toggle(key)
    return _save(store, sync)


@router.post("/me/dates/mark", response_model=ScheduleResponse)
async def mark_my_dates(
    body: DateMarkRequest,
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    service: ScheduleService = Depends(get_schedule_service),
    sync: ScheduleSync = Depends(get_schedule_sync)
):
    """Select every date dragged over. Already selected dates stay selected."""
    keys = [as_date_key(d) for d in body.dates]
    store = service.load_store(profile.id, member_display_name(profile))
    for key in keys:
        store.mark_range(key)
    if not store.has_changes:
        return service.find_schedule_by_member(profile.id) or _empty_schedule(profile)
    return _save(store, sync)


@router.put("/me/dates/{date}/memo", response_model=ScheduleResponse)
async def set_my_memo(
    date: str,
    body: DateMemoRequest,
    profile: UserProfileResponse = Depends(require_capability("schedules:access")),
    service: ScheduleService = Depends(get_schedule_service),
    sync: ScheduleSync = Depends(get_schedule_sync)
):
    """Attach a memo to the date (selecting it), or remove the memo when blank"""
    key = as_date_key(date)
    store = service.load_store(profile.id, member_display_name(profile))
    store.set_memo(key, body.memo)
    return _save(store, sync)
