"""Request signing for the settings API.

The API authenticates form posts with a ``checkcode``: an uppercase hex
HMAC-SHA1 over the canonical payload, which is the key-sorted,
URL-encoded ``key=value`` list joined with ``&`` and always carrying the
current Unix time under ``timestamp``.
"""

import hashlib
import hmac
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class SignedRequest:
    """A signed form body ready to post."""

    canonical_payload: str
    checkcode: str
    full_payload: str
    timestamp: str


def encode_value(value: str) -> str:
    """Percent-encode a value the way browsers' encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")


def canonicalize(params: Mapping[str, str]) -> str:
    """Serialize params as sorted ``key=value`` pairs joined with ``&``."""
    return "&".join(f"{key}={encode_value(params[key])}" for key in sorted(params))


def compute_checkcode(payload: str, secret: str) -> str:
    digest = hmac.new(secret.encode(), payload.encode(), hashlib.sha1)
    return digest.hexdigest().upper()


def sign(
    params: Mapping[str, str],
    secret: str,
    clock: Callable[[], float] | None = None,
) -> SignedRequest:
    """Sign params, adding (or overwriting) the ``timestamp`` key.

    ``clock`` defaults to ``time.time``.
    """
    timestamp = str(int((clock or time.time)()))
    merged = {**params, "timestamp": timestamp}
    canonical_payload = canonicalize(merged)
    checkcode = compute_checkcode(canonical_payload, secret)
    return SignedRequest(
        canonical_payload=canonical_payload,
        checkcode=checkcode,
        full_payload=f"{canonical_payload}&checkcode={checkcode}",
        timestamp=timestamp,
    )


def verify(signed: SignedRequest, secret: str) -> bool:
    """Check that a SignedRequest's checkcode matches its canonical payload."""
    expected = compute_checkcode(signed.canonical_payload, secret)
    return hmac.compare_digest(expected, signed.checkcode)
