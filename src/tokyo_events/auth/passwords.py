"""Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of a password; longer inputs are
truncated explicitly so that hashing and verification agree.

Hashing is deliberately slow. The async helpers run it in a worker thread
so a login only suspends its own request.
"""

from __future__ import annotations

import bcrypt
from starlette.concurrency import run_in_threadpool

from tokyo_events.config import get_settings

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor (default from settings)

    Returns:
        bcrypt hash as text
    """
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash
        return False


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)
