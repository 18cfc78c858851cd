import logging
from supabase import Client
from app.modules.instruments.schemas import InstrumentCreate, InstrumentResponse
from typing import Dict, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class InstrumentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_instruments(self) -> List[InstrumentResponse]:
        """List instruments"""
        try:
            result = self.supabase.table("instruments")\
                .select("*")\
                .execute()
            return [InstrumentResponse(**instrument) for instrument in result.data or []]
        except Exception as e:
            logger.error(f"Error listing instruments: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def names_by_abbreviation(self) -> Dict[str, str]:
        return {i.abbreviation: i.name for i in self.list_instruments()}

    def create_instrument(self, instrument_data: InstrumentCreate) -> InstrumentResponse:
        """Create an instrument"""
        if not instrument_data.name.strip() or not instrument_data.abbreviation.strip():
            raise HTTPException(status_code=400, detail="Name and abbreviation are required")
        try:
            result = self.supabase.table("instruments").insert({
                "name": instrument_data.name.strip(),
                "english": instrument_data.english.strip(),
                "abbreviation": instrument_data.abbreviation.strip(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create instrument")

            return InstrumentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating instrument {instrument_data.name}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
