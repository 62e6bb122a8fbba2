from __future__ import annotations

import bcrypt

from qrdine.application.ports.services import PasswordHasher

# bcrypt only looks at the first 72 bytes.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return (password or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(self._rounds)).decode(
            "utf-8"
        )

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except ValueError:
            return False
