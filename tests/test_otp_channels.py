import json

import httpx
import pytest

from app.services.otp_service import (
    ConsoleOtpChannel,
    Fast2SmsOtpChannel,
    build_otp_channel,
    render_otp_message,
)

pytestmark = pytest.mark.asyncio

API_URL = "https://sms.test/dev/bulkV2"


def channel_with(handler, api_key="key-123"):
    return Fast2SmsOtpChannel(api_key=api_key, api_url=API_URL, transport=httpx.MockTransport(handler))


async def test_render_message():
    assert render_otp_message("0420") == "Your OTP for Stockology is 0420"

async def test_console_channel_accepts():
    assert await ConsoleOtpChannel().send("Your OTP for Stockology is 1234", "+911234567890") is True

async def test_fast2sms_success():
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"return": True, "request_id": "abc"})

    sent = await channel_with(handler).send("Your OTP for Stockology is 1234", "+911234567890")

    assert sent is True
    assert seen["auth"] == "key-123"
    assert seen["body"]["numbers"] == "1234567890"
    assert seen["body"]["message"] == "Your OTP for Stockology is 1234"

async def test_fast2sms_rejected():
    def handler(request):
        return httpx.Response(200, json={"return": False, "message": "Invalid Numbers"})

    assert await channel_with(handler).send("hi", "9876543210") is False

async def test_fast2sms_non_object_body():
    def handler(request):
        return httpx.Response(200, json=["unexpected"])

    assert await channel_with(handler).send("hi", "9876543210") is False

async def test_fast2sms_plain_string_body():
    def handler(request):
        return httpx.Response(200, json="ok")

    assert await channel_with(handler).send("hi", "9876543210") is False

async def test_fast2sms_http_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    assert await channel_with(handler).send("hi", "9876543210") is False

async def test_fast2sms_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert await channel_with(handler).send("hi", "9876543210") is False

async def test_fast2sms_without_key():
    def handler(request):
        raise AssertionError("no request expected")

    assert await channel_with(handler, api_key=None).send("hi", "9876543210") is False

async def test_build_otp_channel():
    assert isinstance(build_otp_channel("console"), ConsoleOtpChannel)
    assert isinstance(build_otp_channel("FAST2SMS"), Fast2SmsOtpChannel)
    with pytest.raises(ValueError):
        build_otp_channel("carrier-pigeon")
