"""Issuing and verifying signed bearer tokens."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import Settings
from src.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION = timedelta(days=7)


class TokenService:
    """Stateless JWT issuer/verifier bound to one shared secret.

    Tokens carry ``sub`` (user id), ``iat``, ``exp`` and a random ``jti``.
    There is no revocation list: a token stays valid until ``exp``.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration: timedelta = DEFAULT_EXPIRATION,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expiration = expiration

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build a token service from application settings."""
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def issue(self, subject_id: uuid.UUID, issued_at: datetime | None = None) -> str:
        """Create a signed token for the given user id."""
        issued_at = issued_at or datetime.now(UTC)
        claims = {
            "sub": str(subject_id),
            "iat": issued_at,
            "exp": issued_at + self.expiration,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """Validate signature and expiry, returning the subject user id."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise UnauthorizedError() from None

        try:
            return uuid.UUID(payload["sub"])
        except (KeyError, TypeError, ValueError):
            logger.debug("Rejected token with malformed subject")
            raise UnauthorizedError() from None
