import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-for-testing-only"
os.environ["OTP_PROVIDER"] = "console"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_otp_channel
from app.core.security import TokenIssuer
from app.db.models import User
from app.db.session import get_session, init_db
from app.main import app
from app.services.account_service import AccountService
from app.services.otp_service import OtpChannel


class RecordingOtpChannel(OtpChannel):
    """Keeps every message instead of sending it."""
    name = "recording"

    def __init__(self, accept: bool = True, on_send=None):
        self.accept = accept
        self.sent = []
        self.on_send = on_send

    async def send(self, message: str, phone_number: str) -> bool:
        self.sent.append((message, phone_number))
        if self.on_send is not None:
            await self.on_send(message, phone_number)
        return self.accept

    @property
    def last_otp(self) -> str:
        message, _ = self.sent[-1]
        return message.rsplit(" ", 1)[-1]


@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()

@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session

@pytest.fixture
def otp_channel():
    return RecordingOtpChannel()

@pytest.fixture
def token_issuer():
    return TokenIssuer("test-secret-for-testing-only")

@pytest.fixture
def service(session, token_issuer, otp_channel):
    return AccountService(session, token_issuer, otp_channel)

@pytest.fixture
def fetch_user(session_maker):
    """Read a user through a fresh session, i.e. what is actually stored."""
    async def _fetch(user_id) -> User:
        async with session_maker() as s:
            return await s.get(User, user_id)
    return _fetch

@pytest_asyncio.fixture
async def client(session_maker, otp_channel):
    async def _get_session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_otp_channel] = lambda: otp_channel
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
