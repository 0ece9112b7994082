import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.logger import get_logger

log = get_logger("http")

class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        client = request.client.host if request.client else "-"

        # Bodies are never logged: they carry passwords and OTPs
        log.info(
            f"Method: {request.method} | "
            f"Path: {request.url.path} | "
            f"Client: {client} | "
            f"Status: {response.status_code} | "
            f"Duration: {process_time:.4f}s"
        )

        return response
