import hashlib
import hmac
from typing import Optional


def sign_webhook_payload(secret: str, raw_body: bytes) -> str:
    """Hex HMAC-SHA256 of the raw request body"""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_webhook_signature(secret: str, raw_body: bytes, signature: Optional[str]) -> bool:
    if not signature:
        return False
    expected = sign_webhook_payload(secret, raw_body)
    return hmac.compare_digest(expected, signature.strip().lower())
