"""JWT token utilities.

Tokens are issued by the account service with a shared secret and carry
the user's id and username. This service only verifies them.
"""

from datetime import datetime

import jwt
from pydantic import BaseModel

from banter.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    username: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
