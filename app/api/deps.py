from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import messages
from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import TokenIssuer
from app.db.session import get_session
from app.services.account_service import AccountService
from app.services.otp_service import OtpChannel, build_otp_channel

# Plain bearer scheme: the docs UI takes a pasted token, login itself is JSON
bearer_scheme = HTTPBearer(auto_error=False)

def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(settings.SECRET_KEY, settings.ALGORITHM)

def get_otp_channel() -> OtpChannel:
    return build_otp_channel(settings.OTP_PROVIDER)

async def get_account_service(
    session: AsyncSession = Depends(get_session),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    otp_channel: OtpChannel = Depends(get_otp_channel),
) -> AccountService:
    return AccountService(session, token_issuer, otp_channel)

async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_token: Optional[str] = Header(default=None, alias="auth-token"),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> UUID:
    """
    Resolve the session token to a user id.

    Accepts ``Authorization: Bearer <token>`` or the ``auth-token`` header
    that register, login and verify-otp hand out. Whether the account still
    exists is left to the service.
    """
    token = credentials.credentials if credentials else auth_token
    if not token:
        raise AuthenticationError(messages.NOT_AUTHENTICATED)

    subject = token_issuer.decode(token)
    if subject is None:
        raise AuthenticationError(messages.NOT_AUTHENTICATED)
    try:
        return UUID(subject)
    except ValueError:
        raise AuthenticationError(messages.NOT_AUTHENTICATED)
