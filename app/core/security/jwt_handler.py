"""
JWT token management utilities.

Handles creation and validation of the bearer tokens issued at login.
"""

import jwt
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from app.config.settings import Settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


class JWTManager:
    """
    JWT token manager for authentication.

    Tokens carry the numeric ``user_id`` of their holder and expire after a
    fixed number of hours.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_HOURS = 24

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_hours: int = DEFAULT_ACCESS_TOKEN_EXPIRE_HOURS,
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_hours: Access token expiration in hours
        """
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_hours = access_token_expire_hours

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTManager":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            access_token_expire_hours=settings.ACCESS_TOKEN_EXPIRE_HOURS,
        )

    def create_access_token(
        self,
        user_id: int,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            additional_claims: Additional claims to include
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(hours=self.access_token_expire_hours))

        payload = {
            "user_id": user_id,
            "token_type": "access",
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify

        Returns:
            Decoded token payload

        Raises:
            TokenExpiredError: If token is expired
            InvalidTokenError: If token is invalid
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "user_id"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token verification failed: token expired")
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise InvalidTokenError(reason=type(e).__name__)

    def get_user_id(self, token: str) -> int:
        """
        Verify a token and return the user it was issued to.

        Raises:
            InvalidTokenError: If the ``user_id`` claim is not an integer
        """
        payload = self.verify_token(token)
        try:
            return int(payload["user_id"])
        except (TypeError, ValueError):
            raise InvalidTokenError(reason="malformed user_id claim")
