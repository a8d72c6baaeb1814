"""bcrypt password hashing."""

import bcrypt

from core.config import settings

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
_MAX_PASSWORD_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher:
    """Salted bcrypt hashes with a fixed cost factor."""

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # Malformed hash ("Invalid salt")
            return False
