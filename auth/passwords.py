"""
auth/passwords.py -- Salted keyed-hash password storage.

Scheme: HMAC-SHA-512 keyed with a per-user random salt.
  digest = HMAC-SHA512(key=salt, msg=utf8(password))

The salt is the MAC key, not a prefix or suffix of the message. A fresh
128-byte salt (one SHA-512 block) is drawn from the OS CSPRNG for every
registration, so two users with the same password get unrelated digests.

Verification recomputes the MAC with the stored salt and compares with
hmac.compare_digest, which inspects the whole buffer regardless of where
the first mismatch is.

Layer rule: stdlib only.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

SALT_BYTES = 128


def compute_digest(plain: str, salt: bytes) -> bytes:
    """Return HMAC-SHA512(salt, plain) for the given salt."""
    return hmac.new(salt, plain.encode("utf-8"), hashlib.sha512).digest()


def hash_password(plain: str) -> tuple[bytes, bytes]:
    """Hash a plaintext password under a freshly generated salt.

    Returns (digest, salt). Both must be persisted; neither is useful alone.
    """
    salt = secrets.token_bytes(SALT_BYTES)
    return compute_digest(plain, salt), salt


def verify_password(plain: str, digest: bytes, salt: bytes) -> bool:
    """Return True if plain hashes to digest under salt."""
    if not digest or not salt:
        return False
    return hmac.compare_digest(compute_digest(plain, salt), digest)
