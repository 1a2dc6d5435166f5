"""
Payment link codec.

Payment pages receive the invoice amount and identifiers as an opaque query
parameter. The payload is AES-256-CBC encrypted with a passphrase in the
OpenSSL "Salted__" format (EVP_BytesToKey with MD5), which is the format the
browser side produces with crypto-js passphrase encryption.
"""

import base64
import binascii
import hashlib
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from app.config import settings

logger = logging.getLogger(__name__)

SALT_HEADER = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16


class PaymentDataError(ValueError):
    """Payment data could not be encrypted or decrypted."""


def _derive_key_iv(passphrase: bytes, salt: bytes) -> Tuple[bytes, bytes]:
    derived = b""
    block = b""
    while len(derived) < KEY_SIZE + IV_SIZE:
        block = hashlib.md5(block + passphrase + salt).digest()
        derived += block
    return derived[:KEY_SIZE], derived[KEY_SIZE:KEY_SIZE + IV_SIZE]


def encrypt_text(plaintext: str, passphrase: str, salt: Optional[bytes] = None) -> str:
    salt = salt if salt is not None else os.urandom(SALT_SIZE)
    key, iv = _derive_key_iv(passphrase.encode(), salt)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode()) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(SALT_HEADER + salt + ciphertext).decode()


def decrypt_text(token: str, passphrase: str) -> str:
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PaymentDataError("Encrypted data is not valid base64") from e
    if not raw.startswith(SALT_HEADER) or len(raw) <= len(SALT_HEADER) + SALT_SIZE:
        raise PaymentDataError("Encrypted data has no salt header")
    salt = raw[len(SALT_HEADER):len(SALT_HEADER) + SALT_SIZE]
    ciphertext = raw[len(SALT_HEADER) + SALT_SIZE:]
    if len(ciphertext) % IV_SIZE:
        raise PaymentDataError("Encrypted data has an invalid length")
    key, iv = _derive_key_iv(passphrase.encode(), salt)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode()
    except (ValueError, UnicodeDecodeError) as e:
        raise PaymentDataError("Failed to decrypt data") from e


def encrypt_payment_data(data: Dict[str, Any], passphrase: Optional[str] = None) -> str:
    """Encrypt payment fields (amount, invoice_id, user_id, invoice_number)."""
    try:
        return encrypt_text(json.dumps(data), passphrase or settings.payment_encryption_key)
    except (TypeError, ValueError) as e:
        logger.error(f"Encryption error: {e}")
        raise PaymentDataError("Failed to encrypt payment data") from e


def decrypt_payment_data(token: str, passphrase: Optional[str] = None) -> Dict[str, Any]:
    try:
        decrypted = decrypt_text(token, passphrase or settings.payment_encryption_key)
        payload = json.loads(decrypted)
    except (PaymentDataError, json.JSONDecodeError) as e:
        logger.warning(f"Decryption error: {e}")
        raise PaymentDataError("Failed to decrypt payment data. Invalid or corrupted data.") from e
    if not isinstance(payload, dict):
        raise PaymentDataError("Failed to decrypt payment data. Invalid or corrupted data.")
    return payload
