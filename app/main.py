from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import AccountError, ValidationError
from app.core.logger import get_logger
from app.db.session import init_db
from app.middleware.log_middleware import LogMiddleware

log = get_logger("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["auth-token"],
)

app.add_middleware(LogMiddleware)

@app.exception_handler(AccountError)
async def account_error_handler(request: Request, exc: AccountError):
    log.info(f"{request.method} {request.url.path} failed: {exc.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
    error = ValidationError(f"Invalid value for {field}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_dict())

@app.get("/")
async def root():
    return {"message": "Welcome to Stockology API"}

from app.api.api import api_router
app.include_router(api_router, prefix=settings.API_V1_STR)
