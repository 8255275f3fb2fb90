"""Hashing, clock and nonce helpers used by the platform signing flows."""

import base64
import binascii
import hashlib
import secrets
import string
import time
from datetime import UTC, datetime
from email.utils import format_datetime

NONCE_ALPHABET = string.ascii_letters + string.digits


def md5_hex(data: bytes | str) -> str:
    """Return the lowercase hex MD5 digest of ``data``.

    Strings are encoded as UTF-8 first.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()


def sha1_hex(text: str) -> str:
    """Return the lowercase hex SHA1 digest of the UTF-8 encoding of ``text``."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def rfc1123_now(now: datetime | None = None) -> str:
    """Format the current instant (or ``now``) as an RFC1123 GMT date.

    Example: ``Sat, 15 Nov 2025 08:00:00 GMT``
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return format_datetime(now.astimezone(UTC), usegmt=True)


def random_nonce(length: int = 16) -> str:
    """Generate a nonce drawn uniformly from ``[A-Za-z0-9]``."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def epoch_millis() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def encode_login_state(return_url: str) -> str:
    """Pack the post-login return URL into an OAuth ``state`` value."""
    return base64.urlsafe_b64encode(return_url.encode("utf-8")).decode("ascii")


def decode_login_state(state: str) -> str:
    """Recover the return URL packed by :func:`encode_login_state`.

    Raises:
        ValueError: If ``state`` is not valid base64 of a UTF-8 string.
    """
    try:
        padded = state + "=" * (-len(state) % 4)
        decoded = base64.b64decode(
            padded.encode("ascii"), altchars=b"-_", validate=True
        ).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise ValueError("Malformed login state") from e
    if not decoded:
        raise ValueError("Malformed login state")
    return decoded
