"""Plain JSON export/import and passphrase-encrypted backups.

Encrypted blob layout::

    MAGIC (7 bytes) | salt (16) | nonce (12) | AES-256-GCM ciphertext + tag

The key is derived from the passphrase with PBKDF2-HMAC-SHA256.
"""

import json
import os

import structlog
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import DecryptionError, StateImportError
from .models import AppState
from .schema import dump_state, parse_state

logger = structlog.get_logger()

MAGIC = b"COSMOS1"
SALT_SIZE = 16
NONCE_SIZE = 12
KDF_ITERATIONS = 120_000
_HEADER_SIZE = len(MAGIC) + SALT_SIZE + NONCE_SIZE


def export_json(state: AppState) -> str:
    """Serialize the full state as indented JSON."""
    return json.dumps(dump_state(state), indent=2, ensure_ascii=False)


def import_json(text: str) -> AppState:
    """Parse exported JSON into a new AppState.

    Raises:
        StateImportError: If the text is not valid JSON or not a valid state
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise StateImportError(f"Invalid JSON: {e}") from e
    return parse_state(data)


def _derive_key(passphrase: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def encrypt_state(state: AppState, passphrase: str) -> bytes:
    """Encrypt the serialized state with a passphrase-derived key."""
    if not passphrase:
        raise ValueError("Passphrase must not be empty")
    salt = os.urandom(SALT_SIZE)
    nonce = os.urandom(NONCE_SIZE)
    plaintext = json.dumps(dump_state(state), ensure_ascii=False).encode("utf-8")
    ciphertext = AESGCM(_derive_key(passphrase, salt)).encrypt(nonce, plaintext, MAGIC)
    return MAGIC + salt + nonce + ciphertext


def decrypt_state(blob: bytes, passphrase: str) -> AppState:
    """Decrypt and validate a backup produced by encrypt_state().

    Raises:
        DecryptionError: Wrong passphrase, corrupt/truncated blob, or a
            plaintext that is not a valid state document
    """
    if not passphrase:
        raise ValueError("Passphrase must not be empty")
    if len(blob) <= _HEADER_SIZE or not blob.startswith(MAGIC):
        raise DecryptionError("Not a cosmos backup or backup is truncated")

    salt = blob[len(MAGIC) : len(MAGIC) + SALT_SIZE]
    nonce = blob[len(MAGIC) + SALT_SIZE : _HEADER_SIZE]
    ciphertext = blob[_HEADER_SIZE:]
    try:
        plaintext = AESGCM(_derive_key(passphrase, salt)).decrypt(nonce, ciphertext, MAGIC)
    except InvalidTag as e:
        logger.warning("backup_decrypt_failed", reason="invalid_tag")
        raise DecryptionError("Wrong passphrase or corrupted backup") from e

    try:
        return import_json(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, StateImportError) as e:
        raise DecryptionError(f"Backup decrypted but contents are invalid: {e}") from e
