"""
OTP delivery channels.

A channel takes the rendered message and the destination number and reports
whether the provider accepted it. Channels never raise for provider
failures; ``AccountService.send_otp`` turns a ``False`` into a DeliveryError.

- ConsoleOtpChannel: writes the message to the log (development)
- Fast2SmsOtpChannel: Fast2SMS bulk SMS API over httpx
"""
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from app.core.config import settings
from app.core.logger import get_logger

log = get_logger("otp")

OTP_MESSAGE_TEMPLATE = "Your OTP for Stockology is {otp}"

def render_otp_message(otp: str) -> str:
    return OTP_MESSAGE_TEMPLATE.format(otp=otp)

def mask_phone_number(phone_number: str) -> str:
    return f"***{phone_number[-4:]}"


class OtpChannel(ABC):
    name = "abstract"

    @abstractmethod
    async def send(self, message: str, phone_number: str) -> bool:
        ...


class ConsoleOtpChannel(OtpChannel):
    name = "console"

    async def send(self, message: str, phone_number: str) -> bool:
        log.info(f"[DEV OTP] to {phone_number}: {message}")
        return True


class Fast2SmsOtpChannel(OtpChannel):
    name = "fast2sms"

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://www.fast2sms.com/dev/bulkV2",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport
        if not api_key:
            log.warning("SMS_API_KEY not set for fast2sms provider")

    @staticmethod
    def local_number(phone_number: str) -> str:
        # Fast2SMS takes the bare 10 digit number, without country code
        digits = phone_number.lstrip("+")
        return digits[-10:]

    async def send(self, message: str, phone_number: str) -> bool:
        if not self.api_key:
            log.error("Cannot send OTP: SMS_API_KEY not configured")
            return False

        payload = {
            "route": "q",
            "message": message,
            "language": "english",
            "flash": 0,
            "numbers": self.local_number(phone_number),
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"authorization": self.api_key},
                )
        except httpx.HTTPError as e:
            log.error(f"Fast2SMS request failed for {mask_phone_number(phone_number)}: {e!r}")
            return False

        if response.status_code >= 400:
            log.error(f"Fast2SMS returned {response.status_code} for {mask_phone_number(phone_number)}")
            return False

        try:
            body = response.json()
        except ValueError:
            body = None
        accepted = isinstance(body, dict) and bool(body.get("return"))
        if not accepted:
            log.error(f"Fast2SMS rejected message for {mask_phone_number(phone_number)}: {response.text[:200]}")
        return accepted


def build_otp_channel(provider: Optional[str] = None) -> OtpChannel:
    provider = (provider or settings.OTP_PROVIDER).lower()
    if provider == "console":
        return ConsoleOtpChannel()
    if provider == "fast2sms":
        return Fast2SmsOtpChannel(
            api_key=settings.SMS_API_KEY,
            api_url=settings.SMS_API_URL,
            timeout=settings.SMS_TIMEOUT_SECONDS,
        )
    raise ValueError(f"Unknown OTP provider: {provider}")
