from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.logger import get_logger
from app.core.utils import utcnow
from app.db.models import Watchlist

log = get_logger("watchlist")

DEFAULT_SYMBOLS = (
    "SBIN.NS",
    "RELIANCE.NS",
    "TCS.NS",
    "ICICIBANK.NS",
    "HDFCBANK.NS",
    "BAJFINANCE.NS",
    "SUZLON.NS",
)

class WatchlistService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_watchlist(self, user_id: UUID) -> List[Watchlist]:
        stmt = select(Watchlist).where(Watchlist.user_id == user_id).order_by(Watchlist.created_at, Watchlist.symbol)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def seed_default(self, user_id: UUID) -> List[Watchlist]:
        """
        Add the starter symbols the user is not tracking yet.

        Rows are added to the session but not committed, so seeding lands in
        the same transaction as the verification update. Symbols already on
        the list are skipped; the (user_id, symbol) constraint backs this up.
        """
        existing = {entry.symbol for entry in await self.get_watchlist(user_id)}

        now = utcnow()
        created = []
        for symbol in DEFAULT_SYMBOLS:
            if symbol in existing:
                continue
            entry = Watchlist(user_id=user_id, symbol=symbol, created_at=now, updated_at=now)
            self.session.add(entry)
            created.append(entry)

        log.info(f"Seeded {len(created)} watchlist symbols for user {user_id}")
        return created
