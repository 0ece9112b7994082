from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Stockology"
    API_V1_STR: str = "/api/v1"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "stockology"
    DATABASE_URL: Optional[str] = None

    # Token signing, no default: startup fails when it is not provided
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # OTP
    OTP_LENGTH: int = 4
    OTP_PROVIDER: str = "console"  # console, fast2sms
    SMS_API_URL: str = "https://www.fast2sms.com/dev/bulkV2"
    SMS_API_KEY: Optional[str] = None
    SMS_TIMEOUT_SECONDS: float = 10.0

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.DATABASE_URL:
            self.DATABASE_URL = f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}/{self.POSTGRES_DB}"

settings = Settings()
