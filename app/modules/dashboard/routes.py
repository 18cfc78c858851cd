from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.dashboard.schemas import DashboardSummary
from app.modules.dashboard.service import DashboardService
from app.modules.instruments.service import InstrumentService
from app.modules.schedules.service import ScheduleService
from app.modules.users.schemas import UserProfileResponse
from app.modules.users.service import UserService
from app.core.dependencies import require_capability
from supabase import Client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(UserService(supabase), ScheduleService(supabase), InstrumentService(supabase))


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    profile: UserProfileResponse = Depends(require_capability("dashboard:access")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Member counts, instrument breakdown and this week's attendance"""
    return service.summary()
