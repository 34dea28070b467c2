"""JWT token domain service."""

import logfire

from banter.config import AuthSettings
from banter.util.jwt import TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a JWT token and extract its payload.

        Raises:
            JWTError: If the token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified",
                    user_id=payload.user_id,
                    username=payload.username,
                )
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract the user ID from a token without raising.

        Used by routes where authentication is optional.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return payload.user_id
        except Exception as e:
            # Invalid or expired token, treat as anonymous
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
