from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, Index, text
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .watchlist import Watchlist

class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = (
        # A phone number may sit on several unverified accounts but only one verified one.
        Index(
            "uq_users_verified_phone_number",
            "phone_number",
            unique=True,
            postgresql_where=text("is_phone_number_verified"),
            sqlite_where=text("is_phone_number_verified = 1"),
        ),
    )
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    full_name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    phone_number: Optional[str] = Field(default=None, index=True)
    pending_otp: Optional[str] = None
    is_phone_number_verified: bool = Field(default=False)
    is_profile_complete: bool = Field(default=False)
    joined_on: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True)))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))

    watchlist: List["Watchlist"] = Relationship(back_populates="user")
