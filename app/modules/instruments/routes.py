from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.instruments.schemas import InstrumentCreate, InstrumentResponse
from app.modules.instruments.service import InstrumentService
from app.modules.users.schemas import UserProfileResponse
from app.core.dependencies import get_current_profile, require_capability
from supabase import Client
from typing import List

router = APIRouter(prefix="/instruments", tags=["instruments"])


def get_instrument_service(supabase: Client = Depends(get_supabase)) -> InstrumentService:
    return InstrumentService(supabase)


@router.get("", response_model=List[InstrumentResponse])
async def list_instruments(
    profile: UserProfileResponse = Depends(get_current_profile),
    service: InstrumentService = Depends(get_instrument_service)
):
    """List instruments"""
    return service.list_instruments()


@router.post("", response_model=InstrumentResponse, status_code=201)
async def create_instrument(
    instrument_data: InstrumentCreate,
    profile: UserProfileResponse = Depends(require_capability("members:access")),
    service: InstrumentService = Depends(get_instrument_service)
):
    """Create an instrument"""
    return service.create_instrument(instrument_data)
