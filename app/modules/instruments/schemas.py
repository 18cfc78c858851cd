from pydantic import BaseModel


class InstrumentCreate(BaseModel):
    name: str
    english: str = ""
    abbreviation: str


class InstrumentResponse(BaseModel):
    id: str
    name: str
    english: str = ""
    abbreviation: str

    class Config:
        from_attributes = True
