from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import CamelModel


# Request schemas. Fields are optional so the service can answer with the
# same messages the clients already expect.
class SignupRequest(BaseModel):
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None


class SendOtpRequest(BaseModel):
    email: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None


# Response schemas
class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    is_verified: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SignupResponse(BaseModel):
    success: bool = True
    user: UserResponse
    message: str


class AuthSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user: UserResponse
    session_token: str = Field(..., alias="sessionToken")
