"""
Fernet encryption for provider API keys stored at rest.
"""

from cryptography.fernet import Fernet, InvalidToken

from ideaforge.config import settings


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""

    pass


def _get_fernet() -> Fernet:
    """Get Fernet instance with configured key."""
    key = settings.ideaforge_encryption_key
    if not key:
        raise EncryptionError("IDEAFORGE_ENCRYPTION_KEY not configured")
    try:
        return Fernet(key.encode())
    except ValueError as e:
        raise EncryptionError(f"Invalid encryption key: {e}") from e


def encrypt_value(plaintext: str) -> bytes:
    """Encrypt a plaintext string.

    Raises:
        EncryptionError: If no valid key is configured
    """
    return _get_fernet().encrypt(plaintext.encode())


def decrypt_value(ciphertext: bytes) -> str:
    """Decrypt encrypted bytes.

    Raises:
        EncryptionError: If decryption fails
    """
    fernet = _get_fernet()
    try:
        return fernet.decrypt(ciphertext).decode()
    except InvalidToken as e:
        raise EncryptionError("Decryption failed - invalid token or key") from e
