from sqlmodel import SQLModel
from .user import User
from .watchlist import Watchlist

__all__ = [
    "SQLModel",
    "User",
    "Watchlist",
]
