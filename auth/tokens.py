"""
auth/tokens.py -- Password hashing and session token utilities.

Security design decisions:
  Passwords: bcrypt used directly (no passlib wrapper). Each hash embeds its
       own random salt and the configured cost factor (BCRYPT_ROUNDS), and
       bcrypt.checkpw compares in constant time. dummy_hash() lets the
       login resolver spend one bcrypt check even when the email is
       unknown, so response time does not reveal which emails exist.
       bcrypt only reads 72 bytes; longer passwords are rejected rather than
       silently truncated (MAX_PASSWORD_BYTES).

  JWT: python-jose with HS256. Tokens carry the user id and expiry and are
       the request-scoped replacement for the process-wide session slot.
       Decoding returns None on any failure -- the caller treats that as an
       empty session.

  SECRET_KEY: read from core.config.get_settings() on each call, never at
       import time, so importing this module needs no configuration. Dev
       mode (DEBUG=true) auto-generates a random key with a warning;
       production mode refuses to start without one.

Layer rule: no imports from api/, web/, tasks/, or resolvers/. Import from
core/ is allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import bcrypt
from jose import JWTError, jwt

from core.config import get_settings

logger = logging.getLogger("taskboard.auth")

_ALGORITHM = "HS256"

COOKIE_NAME = "access_token"

MAX_PASSWORD_BYTES = 72

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def password_too_long(plain: str) -> bool:
    """True if bcrypt would have to truncate (or, in bcrypt 5, refuse) this password."""
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    Raises ValueError for passwords over MAX_PASSWORD_BYTES. The register
    resolver checks password_too_long() first so callers see a validation
    error instead.
    """
    if password_too_long(plain):
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error. A
    password over MAX_PASSWORD_BYTES can never have been registered, so it
    is a mismatch too.
    """
    if password_too_long(plain):
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """A fixed hash for the unknown-email login path, computed on first use."""
    return hash_password("taskboard_timing_dummy")


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(user_id: str, expire_seconds: int = 0) -> str:
    """Encode a signed JWT naming the session's user id.

    expire_seconds of 0 (default) uses Settings.token_expire_seconds.
    """
    settings = get_settings()
    duration = expire_seconds if expire_seconds > 0 else settings.token_expire_seconds
    expire = datetime.now(timezone.utc) + timedelta(seconds=duration)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> str | None:
    """Verify a JWT and return the user id it names, or None on any failure."""
    try:
        payload = jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) and sub else None


# ---------------------------------------------------------------------------
# Cookie helper
# ---------------------------------------------------------------------------


def set_auth_cookie(response, token: str, expire_seconds: int = 0) -> None:
    """Write the JWT as an httpOnly cookie on the response.

    httponly=True: JS cannot read the cookie.
    samesite="lax": not sent on cross-site POST.
    secure: only sent over HTTPS when SECURE_COOKIES=true.
    max_age: matches the JWT expiry so both expire together.
    """
    settings = get_settings()
    duration = expire_seconds if expire_seconds > 0 else settings.token_expire_seconds
    response.set_cookie(
        COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
        max_age=duration,
    )
