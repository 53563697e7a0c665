from passlib.context import CryptContext

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """Salted bcrypt hashing with a cost factor fixed at construction."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def check(self, hashed: str, plaintext: str) -> bool:
        # passlib compares in constant time; a malformed stored hash is a mismatch
        try:
            return self._context.verify(plaintext, hashed)
        except ValueError:
            return False

    def dummy_check(self) -> None:
        """Spend the same time as a real check when there is no hash to check."""
        self._context.dummy_verify()
