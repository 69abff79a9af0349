"""Stateless JWT session tokens.

A token carries the user's id (``sub``) and username (``name``) plus the
registered ``iss``/``aud``/``iat``/``exp`` claims, signed with a shared
HMAC key. Nothing is stored server-side: a token is valid exactly when its
signature, issuer, audience and expiry all check out.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Callable, Optional, Tuple

from jose import jwt, JWTError

# jose only checks aud/iss/exp when present; a token lacking them is rejected
_REQUIRED_CLAIMS = {
    "require_aud": True,
    "require_iss": True,
    "require_exp": True,
    "require_sub": True,
}


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    issuer: str
    audience: str
    algorithm: str = "HS256"
    expire_minutes: float = 120


@dataclass(frozen=True)
class TokenIdentity:
    """The identity a validated token asserts."""

    user_id: str
    username: str


class TokenService:
    def __init__(self, config: TokenConfig, clock: Optional[Callable[[], datetime]] = None):
        self._config = config
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def config(self) -> TokenConfig:
        return self._config

    def issue(self, user) -> Tuple[str, datetime]:
        """Sign a token for ``user``; returns the token and when it expires."""
        issued_at = self._clock()
        expires_at = issued_at + timedelta(minutes=self._config.expire_minutes)
        claims = {
            "sub": str(user.id),
            "name": user.username,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": int(issued_at.timestamp()),  # NumericDate: seconds since the epoch
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._config.secret_key, algorithm=self._config.algorithm)
        # report the expiry the token actually carries, not the sub-second one
        return token, datetime.fromtimestamp(claims["exp"], UTC)

    def validate(self, token: str) -> Optional[TokenIdentity]:
        """Return the identity in ``token``, or None if it is not acceptable.

        Bad signature, wrong issuer or audience, expiry and garbage input all
        give the same None so callers cannot tell them apart.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                options=_REQUIRED_CLAIMS,
            )
        except JWTError:
            return None

        user_id = payload.get("sub")
        username = payload.get("name")
        if not user_id or not username:
            return None
        return TokenIdentity(user_id=user_id, username=username)
