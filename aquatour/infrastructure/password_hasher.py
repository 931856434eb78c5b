"""Password Hashing — bcrypt digests with verification of legacy plaintext rows.

Invariants:
    - hash() always produces a bcrypt digest ($2b$...)
    - verify() uses bcrypt for bcrypt digests, constant-time equality for legacy plaintext
    - verify() never raises on a malformed digest: it returns False

Design Decisions:
    - bcrypt called directly (no passlib): two functions, no scheme registry needed
    - Legacy plaintext accepted so users imported from the old system can still log in;
      their digest is upgraded on the next password change
"""

import hmac
import logging

import bcrypt

logger = logging.getLogger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def is_bcrypt_digest(digest: str | None) -> bool:
    return bool(digest) and digest.startswith(_BCRYPT_PREFIXES)


class BcryptPasswordHasher:
    """PasswordHasher implementation backed by the bcrypt library."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds),
        ).decode("utf-8")

    def verify(self, password: str, digest: str | None) -> bool:
        if not digest or password is None:
            return False
        if is_bcrypt_digest(digest):
            try:
                return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
            except ValueError as e:
                logger.warning(f"Malformed bcrypt digest: {e}")
                return False
        return hmac.compare_digest(password.encode("utf-8"), digest.encode("utf-8"))
