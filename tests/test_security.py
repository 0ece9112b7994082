import jwt
import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings
from app.core.security import TokenIssuer, get_password_hash, verify_password
from app.core.utils import generate_otp, is_valid_phone_number, utcnow


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        digest = get_password_hash("pw1")
        assert digest != "pw1"
        assert verify_password("pw1", digest) is True

    def test_wrong_password(self):
        digest = get_password_hash("pw1")
        assert verify_password("pw2", digest) is False

    def test_missing_digest(self):
        assert verify_password("pw1", None) is False


class TestTokenIssuer:
    def test_round_trip(self):
        issuer = TokenIssuer("secret")
        token = issuer.issue("3fa85f64-5717-4562-b3fc-2c963f66afa6")
        assert issuer.decode(token) == "3fa85f64-5717-4562-b3fc-2c963f66afa6"

    def test_claims(self):
        token = TokenIssuer("secret").issue("user-1")
        claims = jwt.decode(token, "secret", algorithms=["HS256"])
        assert set(claims) == {"sub", "iat", "jti"}
        assert "exp" not in claims

    def test_tokens_are_unique(self):
        issuer = TokenIssuer("secret")
        assert issuer.issue("user-1") != issuer.issue("user-1")

    def test_other_secret_rejected(self):
        token = TokenIssuer("secret").issue("user-1")
        assert TokenIssuer("another-secret").decode(token) is None

    def test_garbage_rejected(self):
        assert TokenIssuer("secret").decode("not-a-token") is None

    def test_secret_required(self):
        with pytest.raises(ValueError):
            TokenIssuer("")


class TestOtpGeneration:
    def test_default_length(self):
        for _ in range(100):
            otp = generate_otp()
            assert len(otp) == 4
            assert otp.isdigit()

    def test_custom_length(self):
        assert len(generate_otp(6)) == 6

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            generate_otp(0)


@pytest.mark.parametrize("phone,expected", [
    ("+911234567890", True),
    ("911234567890", True),
    ("9876543210", True),
    ("+19876543210", True),
    ("987654321", False),
    ("+91 9876543210", False),
    ("98765abcde", False),
    ("", False),
    (None, False),
    (9876543210, False),
])
def test_phone_number_shape(phone, expected):
    assert is_valid_phone_number(phone) is expected


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is not None


class TestSettings:
    def test_secret_key_is_required(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None)

    def test_secret_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "from-env")
        assert Settings(_env_file=None).SECRET_KEY == "from-env"
