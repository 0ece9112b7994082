from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_account_service, get_current_user_id
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SendOtpRequest,
    VerifyOtpRequest,
)
from app.schemas.user import ProfileResponse
from app.services.account_service import AccountService

router = APIRouter()

TOKEN_HEADER = "auth-token"

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    service: AccountService = Depends(get_account_service)
):
    result = await service.register(payload.full_name, payload.email, payload.password)
    response.headers[TOKEN_HEADER] = result.token
    return result

@router.post("/send-otp", response_model=MessageResponse)
async def send_otp(
    payload: SendOtpRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service)
):
    return await service.send_otp(user_id, payload.phone_number)

@router.post("/verify-otp", response_model=AuthResponse)
async def verify_otp(
    payload: VerifyOtpRequest,
    response: Response,
    user_id: UUID = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service)
):
    result = await service.verify_otp(user_id, payload.otp)
    response.headers[TOKEN_HEADER] = result.token
    return result

@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service)
):
    return await service.get_profile(user_id)

@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    service: AccountService = Depends(get_account_service)
):
    result = await service.login(payload.email, payload.password)
    response.headers[TOKEN_HEADER] = result.token
    return result
