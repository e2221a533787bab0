"""Integrity check for score submissions.

The scheme is a plain salted SHA-256 over ``name + token + score``. Any client
able to submit scores carries the token, so this only deters casual tampering
and is not an authentication boundary.
"""

import hashlib
import hmac
from typing import Protocol

from .models import SubmittedEntry

SECRET_TOKEN = "TheTurtle"


class InvalidHashError(Exception):
    """Raised when a submission's hash does not match."""


class ScoreValidator(Protocol):
    """Decides whether a submission may be stored."""

    def is_valid(self, submitted: SubmittedEntry) -> bool: ...


def compute_hash(name: str, score: int, secret_token: str = SECRET_TOKEN) -> str:
    """Return the hex digest a client must send for ``name`` and ``score``."""
    payload = f"{name}{secret_token}{score}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class SharedSecretValidator:
    """Validates submissions against the shared-secret hash."""

    def __init__(self, secret_token: str = SECRET_TOKEN) -> None:
        self.secret_token = secret_token

    def is_valid(self, submitted: SubmittedEntry) -> bool:
        expected = compute_hash(submitted.name, submitted.score, self.secret_token)
        return hmac.compare_digest(
            expected.encode("utf-8"), submitted.hash.encode("utf-8")
        )
