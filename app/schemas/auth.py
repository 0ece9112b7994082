from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional

from app.schemas.user import UserResponse

# Every field is optional: missing values are reported by the service
# as a ValidationError rather than by FastAPI's 422.

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

class RegisterRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None

class SendOtpRequest(CamelModel):
    phone_number: Optional[str] = None

class VerifyOtpRequest(CamelModel):
    otp: Optional[str] = None

class AuthResponse(BaseModel):
    status: bool = True
    token: str
    message: str
    data: UserResponse

class MessageResponse(BaseModel):
    status: bool = True
    message: str
