import hashlib
import hmac

from engagement.app.services.webhook_signature import sign_webhook_payload, verify_webhook_signature

BODY = b'{"id":"evt_1","type":"transaction.completed","data":{"id":"tx_1"}}'


def test_signature_is_hex_hmac_sha256():
    expected = hmac.new(b"secret", BODY, hashlib.sha256).hexdigest()
    assert sign_webhook_payload("secret", BODY) == expected


def test_verify_accepts_valid_signature():
    assert verify_webhook_signature("secret", BODY, sign_webhook_payload("secret", BODY))


def test_verify_rejects_tampered_body_and_missing_signature():
    signature = sign_webhook_payload("secret", BODY)
    assert not verify_webhook_signature("secret", BODY + b" ", signature)
    assert not verify_webhook_signature("other", BODY, signature)
    assert not verify_webhook_signature("secret", BODY, None)
