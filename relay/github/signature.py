"""GitHub webhook signature verification (X-Hub-Signature-256)."""

import hashlib
import hmac

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def extract_signature(header: str | None) -> str | None:
    """Return the hex digest from a `sha256=<hex>` header, or None."""
    if not header or not header.startswith(SIGNATURE_PREFIX):
        return None
    return header[len(SIGNATURE_PREFIX):]


def compute_signature(secret: bytes, body: bytes) -> str:
    return hmac.new(secret, body, hashlib.sha256).hexdigest()


def verify(secret: bytes, body: bytes, claimed_signature: str) -> bool:
    """Check a hex-encoded HMAC-SHA256 of `body` keyed with `secret`.

    Invalid hex is treated as a mismatch rather than an error.
    """
    try:
        claimed = bytes.fromhex(claimed_signature)
    except ValueError:
        return False

    expected = hmac.new(secret, body, hashlib.sha256).digest()
    return hmac.compare_digest(claimed, expected)
