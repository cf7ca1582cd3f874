from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """Adaptive password hashing (werkzeug's scrypt/pbkdf2 formats).

    `method` is passed to werkzeug as-is; None keeps werkzeug's default.
    """

    def __init__(self, method: Optional[str] = None):
        self._method = method

    def hash(self, plaintext: str) -> str:
        if self._method:
            return generate_password_hash(plaintext, method=self._method)
        return generate_password_hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return check_password_hash(digest, plaintext)
        except (ValueError, TypeError, AttributeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
