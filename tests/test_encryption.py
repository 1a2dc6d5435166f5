"""Payment link codec: OpenSSL/crypto-js passphrase format."""

import base64

import pytest

from app.core.encryption import (
    PaymentDataError, decrypt_payment_data, decrypt_text, encrypt_payment_data, encrypt_text,
)

# Produced with: openssl enc -aes-256-cbc -md md5 -S 0001020304050607 -pass pass:secret
HELLO_TOKEN = "U2FsdGVkX18AAQIDBAUGBx+4yh1dTDrd/BSdZH2M06c="

# Same tool, salt 0102030405060708, passphrase test-payment-key
PAYMENT_TOKEN = (
    "U2FsdGVkX18BAgMEBQYHCOumEkkP+4V39x8xM4jMArLVTrCDEsFOgG5BkRczEqiPZQI5Ml0tFB2+Yv/lvOYL/1MPELB97NSJ"
    "8W89h9N6lNZotyuWCmqpclBkuvzfk+kYQoRu0PnhJJoRL6lqYLq/ddvf9HFDLvH7filLNz/Z0cUTM+mFA3EOlk3JF/olUGEd"
    "MhYIZpR13C+Gnzcl/Y2Q9VCa4o0KeiSXY5TNWnrlw2I="
)


def test_decrypts_openssl_token():
    assert decrypt_text(HELLO_TOKEN, "secret") == "hello"


def test_encrypt_with_fixed_salt_matches_openssl():
    assert encrypt_text("hello", "secret", salt=bytes(range(8))) == HELLO_TOKEN


def test_encrypted_token_carries_salt_header():
    raw = base64.b64decode(encrypt_text("hello", "secret"))
    assert raw.startswith(b"Salted__")


def test_decrypts_payment_payload():
    assert decrypt_payment_data(PAYMENT_TOKEN, "test-payment-key") == {
        "amount": "150.00",
        "invoice_id": "30000000-0000-4000-8000-000000000001",
        "user_id": "00000000-0000-4000-8000-000000000004",
        "invoice_number": "INV-1001",
    }


def test_payment_data_uses_configured_key_by_default():
    token = encrypt_payment_data({"amount": "9.99", "invoice_number": "INV-7"})
    assert decrypt_payment_data(token) == {"amount": "9.99", "invoice_number": "INV-7"}


def test_wrong_passphrase_is_rejected():
    with pytest.raises(PaymentDataError):
        decrypt_payment_data(PAYMENT_TOKEN, "another-key")


@pytest.mark.parametrize("token", [
    "not base64 at all!",
    base64.b64encode(b"no header here, just bytes").decode(),
    base64.b64encode(b"Salted__12345678" + b"short").decode(),
    "",
])
def test_corrupt_tokens_are_rejected(token):
    with pytest.raises(PaymentDataError):
        decrypt_payment_data(token, "test-payment-key")


def test_non_object_payload_is_rejected():
    token = encrypt_text("[1, 2, 3]", "test-payment-key")
    with pytest.raises(PaymentDataError):
        decrypt_payment_data(token, "test-payment-key")
