"""JWT bearer tokens signed with a shared secret."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from nutrilog.errors import AuthError
from nutrilog.services.auth import TokenCodec

_ALGORITHM = "HS256"


@dataclass
class JwtTokenCodec(TokenCodec):
    """Stateless HS256 tokens carrying only the username."""

    secret: str
    ttl: timedelta = timedelta(days=7)

    def issue(self, username: str) -> str:
        """Return a token for the username that expires after the TTL."""
        now = datetime.now(tz=UTC)
        payload = {"username": username, "iat": now, "exp": now + self.ttl}
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> str:
        """Return the username from a valid, unexpired token."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "username"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("Invalid token") from exc
        username = payload["username"]
        if not isinstance(username, str) or not username:
            raise AuthError("Invalid token")
        return username
