from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional
from uuid import UUID
from datetime import datetime

class UserResponse(BaseModel):
    """Public view of an account. The password digest and pending OTP are never included."""
    id: UUID
    full_name: str
    email: str
    phone_number: Optional[str] = None
    is_phone_number_verified: bool
    is_profile_complete: bool
    joined_on: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class ProfileResponse(BaseModel):
    status: bool = True
    message: str
    data: UserResponse
