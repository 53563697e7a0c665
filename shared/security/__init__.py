from .jwt_handler import IssuedToken, TokenClaims, TokenService, TokenType
from .passwords import PasswordHasher
from .dependencies import get_current_user_id

__all__ = [
    "IssuedToken",
    "TokenClaims",
    "TokenService",
    "TokenType",
    "PasswordHasher",
    "get_current_user_id",
]
