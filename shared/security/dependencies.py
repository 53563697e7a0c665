from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from shared.errors import AppError, ErrorKind

from .jwt_handler import TokenType

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_current_user_id(
    request: Request, token: Optional[str] = Depends(oauth2_scheme)
) -> int:
    """Dependency to validate the access token and return the principal id."""
    if not token:
        raise AppError(ErrorKind.NOT_AUTHENTICATED, "missing bearer token")

    claims = request.app.state.token_service.verify(token, TokenType.ACCESS)

    # Store in request state for downstream use (request logging)
    request.state.user_id = claims.principal_id
    return claims.principal_id
