"""
PBKDF2 password hashing.
"""

import base64
import hashlib
import hmac
import secrets

from comptable.domain.services.i_password_hasher import IPasswordHasher

ALGORITHM = "pbkdf2_sha256"


class Pbkdf2PasswordHasher(IPasswordHasher):
    """
    Salted PBKDF2-HMAC-SHA256 hasher.

    Encoded format: pbkdf2_sha256$<iterations>$<salt>$<hash>
    """

    def __init__(self, iterations: int = 260_000, salt_bytes: int = 16):
        self.iterations = iterations
        self.salt_bytes = salt_bytes

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(self.salt_bytes)
        digest = self._derive(password, salt, self.iterations)
        return f"{ALGORITHM}${self.iterations}${salt}${digest}"

    def verify(self, password: str, encoded: str) -> bool:
        try:
            algorithm, iterations, salt, expected = encoded.split("$", 3)
            iterations = int(iterations)
        except ValueError:
            return False

        if algorithm != ALGORITHM:
            return False

        actual = self._derive(password, salt, iterations)
        return hmac.compare_digest(actual, expected)

    @staticmethod
    def _derive(password: str, salt: str, iterations: int) -> str:
        raw = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt.encode("ascii"), iterations
        )
        return base64.b64encode(raw).decode("ascii")
