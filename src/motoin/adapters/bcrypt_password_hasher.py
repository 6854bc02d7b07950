from __future__ import annotations

import bcrypt

from motoin.ports.security import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a per-password random salt."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Stored hash is not a bcrypt hash
            return False
