from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class SignInCredentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SessionUser(BaseModel):
    """Identity carried in the session cookie."""
    user_id: str
    email: str
    name: Optional[str] = None


class AuthenticateResult(BaseModel):
    message: Optional[str] = None
