"""HS256 bearer tokens issued and verified with PyJWT."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from motoin.domain.errors import TokenExpiredError, UnauthorizedError
from motoin.ports.security import IssuedToken, TokenClaims, TokenService

ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        expires_hours: int,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._ttl = timedelta(hours=expires_hours)
        self._clock = clock

    def issue(self, user_id: str) -> IssuedToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {"sub": user_id, "iat": issued_at, "exp": expires_at}
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return IssuedToken(token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("Invalid token") from exc

        return TokenClaims(
            user_id=str(payload["sub"]),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
