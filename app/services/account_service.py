from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core import messages
from app.core.config import settings
from app.core.exceptions import (
    ConflictError,
    DeliveryError,
    InvalidCredentialError,
    NotFoundError,
    ValidationError,
)
from app.core.logger import get_logger
from app.core.security import TokenIssuer, get_password_hash, verify_password
from app.core.utils import generate_otp, is_valid_phone_number, utcnow
from app.db.models import User
from app.schemas.auth import AuthResponse, MessageResponse
from app.schemas.user import ProfileResponse, UserResponse
from app.services.otp_service import OtpChannel, mask_phone_number, render_otp_message
from app.services.watchlist_service import WatchlistService

log = get_logger("accounts")

class AccountService:
    """
    Account lifecycle: register -> send OTP -> verify OTP -> login / profile.

    Per account the states are Registered, OtpPending and PhoneVerified.
    ``send_otp`` may be repeated until the phone number is verified; nothing
    leaves PhoneVerified.
    """

    def __init__(
        self,
        session: AsyncSession,
        token_issuer: TokenIssuer,
        otp_channel: OtpChannel,
        otp_length: int = settings.OTP_LENGTH,
    ):
        self.session = session
        self.token_issuer = token_issuer
        self.otp_channel = otp_channel
        self.otp_length = otp_length
        self.watchlist = WatchlistService(session)

    async def get_user_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.session.get(User, user_id, populate_existing=True)
        if not user:
            raise NotFoundError(messages.USER_NOT_FOUND)
        return user

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        return AuthResponse(
            token=self.token_issuer.issue(user.id),
            message=message,
            data=UserResponse.model_validate(user),
        )

    async def register(self, full_name: str | None, email: str | None, password: str | None) -> AuthResponse:
        if not full_name or not email or not password:
            raise ValidationError(messages.FIELDS_REQUIRED)

        if await self.get_user_by_email(email):
            raise ConflictError(messages.USER_EXISTS)

        user = User(
            full_name=full_name,
            email=email,
            password_hash=get_password_hash(password),
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # Lost the race against a concurrent registration for the same email
            await self.session.rollback()
            raise ConflictError(messages.USER_EXISTS)
        await self.session.refresh(user)

        log.info(f"Registered user {user.id}")
        return self._auth_response(user, f"{messages.USER_REGISTERED}. {messages.VERIFY_NUMBER}")

    async def send_otp(self, user_id: UUID, phone_number: str | None) -> MessageResponse:
        if not phone_number or not is_valid_phone_number(phone_number):
            raise ValidationError(messages.INVALID_NUMBER)

        user = await self._get_user(user_id)
        if user.is_phone_number_verified:
            raise ConflictError(messages.PHONE_ALREADY_VERIFIED)

        stmt = select(User).where(
            User.phone_number == phone_number,
            User.is_phone_number_verified == True,
            User.id != user_id,
        )
        result = await self.session.execute(stmt)
        if result.scalars().first():
            raise ConflictError(messages.PHONE_EXISTS)

        otp = generate_otp(self.otp_length)

        # Deliver before writing: no row lock is held while waiting on the
        # provider, and the code is only stored once it has been accepted.
        await self.session.rollback()
        delivered = await self.otp_channel.send(render_otp_message(otp), phone_number)
        if not delivered:
            log.warning(f"OTP delivery via {self.otp_channel.name} failed for user {user_id}")
            raise DeliveryError(messages.OTP_DELIVERY_FAILED)

        stmt = (
            update(User)
            .where(User.id == user_id, User.is_phone_number_verified == False)
            .values(pending_otp=otp, phone_number=phone_number)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            # Verified by a concurrent request while the code was in flight
            await self.session.rollback()
            raise ConflictError(messages.PHONE_ALREADY_VERIFIED)
        await self.session.commit()
        await self.session.refresh(user)

        log.info(f"OTP issued to {mask_phone_number(phone_number)} for user {user_id}")
        return MessageResponse(message=messages.OTP_SENT)

    async def verify_otp(self, user_id: UUID, otp: str | None) -> AuthResponse:
        user = await self._get_user(user_id)
        if not otp:
            raise ValidationError(messages.ENTER_OTP)

        was_verified = user.is_phone_number_verified

        # Compare-and-clear in one statement: a concurrent verification
        # cannot consume the same code twice.
        stmt = (
            update(User)
            .where(User.id == user_id, User.pending_otp == otp)
            .values(
                is_profile_complete=True,
                is_phone_number_verified=True,
                joined_on=utcnow(),
                pending_otp=None,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError:
            # Another account verified this phone number first
            await self.session.rollback()
            raise ConflictError(messages.PHONE_EXISTS)
        if result.rowcount == 0:
            await self.session.rollback()
            raise InvalidCredentialError(messages.INVALID_OTP)

        if not was_verified:
            await self.watchlist.seed_default(user_id)
        await self.session.commit()
        await self.session.refresh(user)

        log.info(f"Phone number verified for user {user_id}")
        return self._auth_response(user, messages.PHONE_VERIFICATION)

    async def login(self, email: str | None, password: str | None) -> AuthResponse:
        if not email or not password:
            raise ValidationError(messages.FIELDS_REQUIRED)

        user = await self.get_user_by_email(email)
        if not user:
            raise NotFoundError(messages.USER_NOT_FOUND)

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialError(messages.LOGIN_ERROR)

        log.info(f"User {user.id} logged in")
        return self._auth_response(user, messages.LOGIN_SUCCESS)

    async def get_profile(self, user_id: UUID) -> ProfileResponse:
        user = await self._get_user(user_id)
        return ProfileResponse(
            message=messages.USER_PROFILE,
            data=UserResponse.model_validate(user),
        )
