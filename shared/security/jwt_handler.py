"""
Issue and verify signed access/refresh tokens.

Each token type has its own secret and lifetime. Verification is strict:
any single failed check rejects the token with NotAuthenticated.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, Tuple

from jose import JWTError, jwt

from shared.config.settings import JWTSettings
from shared.errors import AppError, ErrorKind
from shared.observability.metrics import ecomm_tokens_issued_total

ALGORITHM = "HS256"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    token_type: TokenType
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    principal_id: int
    token_type: TokenType
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class TokenService:

    def __init__(self, config: JWTSettings, clock: Callable[[], datetime] = _utcnow):
        self._config = config
        self._clock = clock

    def _profile(self, token_type: TokenType) -> Tuple[TokenType, str, timedelta]:
        try:
            token_type = TokenType(token_type)
        except ValueError as exc:
            raise AppError(
                ErrorKind.TOKEN_GENERATOR_ERROR, f"invalid token type: {token_type!r}"
            ) from exc
        if token_type is TokenType.ACCESS:
            lifetime = timedelta(minutes=self._config.access_minutes)
            return token_type, self._config.access_secret, lifetime
        lifetime = timedelta(hours=self._config.refresh_hours)
        return token_type, self._config.refresh_secret, lifetime

    def issue(self, principal_id: int, token_type: TokenType) -> IssuedToken:
        token_type, secret, lifetime = self._profile(token_type)
        now = self._clock()
        exp = int((now + lifetime).timestamp())
        claims = {
            "id": principal_id,
            "type": token_type.value,
            "iat": int(now.timestamp()),
            "exp": exp,
        }
        try:
            token = jwt.encode(claims, secret, algorithm=ALGORITHM)
        except JWTError as exc:
            raise AppError(ErrorKind.TOKEN_GENERATOR_ERROR, str(exc)) from exc

        ecomm_tokens_issued_total.labels(type=token_type.value).inc()
        return IssuedToken(
            token=token,
            token_type=token_type,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )

    def verify(self, token: str, expected_type: TokenType) -> TokenClaims:
        expected_type, secret, _ = self._profile(expected_type)

        # Re-check the header algorithm before trusting the signature
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise AppError(ErrorKind.NOT_AUTHENTICATED, "malformed token") from exc
        if header.get("alg") != ALGORITHM:
            raise AppError(
                ErrorKind.NOT_AUTHENTICATED, f"unexpected signing method: {header.get('alg')}"
            )

        try:
            claims: Dict[str, Any] = jwt.decode(
                token, secret, algorithms=[ALGORITHM], options={"verify_exp": False}
            )
        except JWTError as exc:
            raise AppError(ErrorKind.NOT_AUTHENTICATED, str(exc)) from exc

        if claims.get("type") != expected_type.value:
            raise AppError(ErrorKind.NOT_AUTHENTICATED, "invalid token type")

        exp = claims.get("exp")
        if not _is_finite_number(exp):
            raise AppError(ErrorKind.NOT_AUTHENTICATED, "token missing numeric exp claim")
        if self._clock().timestamp() >= exp:
            raise AppError(ErrorKind.NOT_AUTHENTICATED, "token expired")

        principal_id = claims.get("id")
        if not _is_finite_number(principal_id) or principal_id != int(principal_id):
            raise AppError(ErrorKind.NOT_AUTHENTICATED, "token missing numeric id claim")

        return TokenClaims(
            principal_id=int(principal_id),
            token_type=expected_type,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
