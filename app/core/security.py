import uuid
from datetime import datetime, timezone
from typing import Optional, Union
from uuid import UUID

import jwt
from jwt.exceptions import PyJWTError
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


class TokenIssuer:
    """
    Signs session tokens for a user id.

    The secret is handed in at startup (see ``app.api.deps.get_token_issuer``);
    the issuer never reads configuration itself. Tokens carry the user id as
    ``sub`` plus ``iat`` and a random ``jti`` so every issued token is unique.
    They do not expire.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("Token signing secret is not configured")
        self._secret_key = secret_key
        self.algorithm = algorithm

    def issue(self, user_id: Union[UUID, str]) -> str:
        claims = {
            "sub": str(user_id),
            "iat": int(datetime.now(timezone.utc).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[str]:
        """Return the user id carried by ``token`` or None when it does not verify."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except PyJWTError:
            return None
        return payload.get("sub")
