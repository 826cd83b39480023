"""
Cipher - Authenticated encryption of stored credential fields using Fernet.
"""

from typing import Union

from cryptography.fernet import Fernet, InvalidToken

from core.exceptions import DecryptionError, InvalidKeyError


class Cipher:
    """
    Cipher wraps a single Fernet key and encrypts individual vault fields.

    Fernet tokens are URL-safe base64 text embedding a version byte, a
    timestamp, an IV and an HMAC-SHA256 tag, so they can be stored directly as
    JSON strings. Tokens never expire: decryption is done without a TTL.
    """

    def __init__(self, key: Union[str, bytes]):
        """
        Build a cipher from a base64-encoded 32-byte Fernet key.

        Raises:
            InvalidKeyError: If the key is not a valid Fernet key
        """
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as e:
            raise InvalidKeyError("Key is not a 32-byte url-safe base64 encoded key.") from e

    @staticmethod
    def generate_key() -> bytes:
        return Fernet.generate_key()

    def encrypt(self, plaintext: Union[str, bytes]) -> str:
        """
        Encrypt a value and return the token as text.

        Every call embeds a fresh IV and timestamp, so encrypting the same
        plaintext twice gives different tokens.
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        return self._fernet.encrypt(plaintext).decode("ascii")

    def decrypt(self, ciphertext: str) -> bytes:
        """
        Decrypt a token produced by encrypt().

        Raises:
            DecryptionError: If the token is malformed, was tampered with, or
                was produced under a different key
        """
        try:
            return self._fernet.decrypt(ciphertext)
        except (InvalidToken, ValueError, TypeError) as e:
            raise DecryptionError(
                "Unable to decrypt value: wrong key or corrupted data."
            ) from e

    def decrypt_text(self, ciphertext: str) -> str:
        data = self.decrypt(ciphertext)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecryptionError("Decrypted value is not valid UTF-8.") from e
