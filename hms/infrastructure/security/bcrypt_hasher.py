from passlib.context import CryptContext

from ...application.ports.password_hasher import PasswordHasher
from ...core.config import settings


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = settings.BCRYPT_ROUNDS) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(password, hashed_password)
        except ValueError:
            # Unrecognised or corrupt stored hash
            return False
