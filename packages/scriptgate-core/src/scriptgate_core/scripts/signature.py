"""Content-integrity signatures for script versions.

A signature attests that content is unchanged since signing. It carries no
knowledge of findings, so a dangerous script can still be validly signed.
Only the content is hashed; signer and timestamp are stored beside the
digest for audit.
"""

import hashlib
import hmac
from datetime import datetime, timezone

from scriptgate_core.types import Signature

SIGNATURE_ALGORITHM = "SHA-256"


def _digest(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def generate_signature(content: str, signed_by: str) -> Signature:
    """
    Sign script content.

    Args:
        content: Script content
        signed_by: Signer identity, opaque to this module

    Returns:
        Signature with SHA-256 hex digest and current UTC timestamp
    """
    return Signature(
        hash=_digest(content),
        algorithm=SIGNATURE_ALGORITHM,
        timestamp=datetime.now(timezone.utc),
        signed_by=signed_by,
    )


def verify_signature(content: str, signature: Signature) -> bool:
    """
    Check content against a stored signature.

    Args:
        content: Current script content
        signature: Signature generated at sign time

    Returns:
        True only if the recomputed digest equals signature.hash
    """
    if signature.algorithm != SIGNATURE_ALGORITHM:
        return False
    # Compare bytes: str compare_digest rejects non-ASCII input with TypeError
    expected = _digest(content).encode("ascii")
    return hmac.compare_digest(expected, signature.hash.encode("utf-8", "surrogatepass"))
