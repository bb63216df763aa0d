"""bcrypt-backed password hashing."""

from dataclasses import dataclass

import bcrypt

from nutrilog.services.auth import PasswordHasher

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes with a configurable cost factor."""

    rounds: int = 10

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash for the password."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the stored hash."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
