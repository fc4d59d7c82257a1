"""Signature checks for inbound interaction requests."""

from __future__ import annotations

from typing import Callable

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

RequestVerifier = Callable[[bytes, str, str], bool]


def verify_signature(verify_key: VerifyKey, body: bytes, signature: str, timestamp: str) -> bool:
    """Check an Ed25519 signature over ``timestamp + body``."""
    try:
        signature_bytes = bytes.fromhex(signature)
    except ValueError:
        return False
    try:
        verify_key.verify(timestamp.encode("utf-8") + body, signature_bytes)
    except (BadSignatureError, ValueError):
        return False
    return True


def make_verifier(public_key: str) -> RequestVerifier:
    """Build a request verifier for the application's hex-encoded public key."""
    verify_key = VerifyKey(bytes.fromhex(public_key))

    def verifier(body: bytes, signature: str, timestamp: str) -> bool:
        return verify_signature(verify_key, body, signature, timestamp)

    return verifier
