"""
Error kinds raised by the account services.

Each kind carries its own HTTP status and a stable ``code`` so clients can
branch on the failure type instead of the message text. The exception
handler registered in ``app.main`` renders them as
``{"status": false, "code": ..., "message": ...}``.
"""

class AccountError(Exception):
    status_code = 400
    code = "ACCOUNT_ERROR"
    headers = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"status": False, "code": self.code, "message": self.message}

class ValidationError(AccountError):
    """Missing or malformed input."""
    status_code = 400
    code = "VALIDATION_ERROR"

class AuthenticationError(AccountError):
    """Missing, forged or malformed session token."""
    status_code = 401
    code = "NOT_AUTHENTICATED"
    headers = {"WWW-Authenticate": "Bearer"}

class InvalidCredentialError(AccountError):
    """Password or OTP mismatch."""
    status_code = 401
    code = "INVALID_CREDENTIALS"

class NotFoundError(AccountError):
    status_code = 404
    code = "NOT_FOUND"

class ConflictError(AccountError):
    """Uniqueness violation (email, verified phone number)."""
    status_code = 409
    code = "CONFLICT"

class DeliveryError(AccountError):
    """The OTP could not be handed to the delivery channel."""
    status_code = 502
    code = "DELIVERY_FAILED"
