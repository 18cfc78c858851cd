from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    # Supabase Auth rejects passwords shorter than 6 characters
    password: str = Field(min_length=6)
    name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    needs_confirmation: bool = False
    message: str
