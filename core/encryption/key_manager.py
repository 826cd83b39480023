"""
Key Manager - Loads the vault key from the home directory, generating it on first use.
"""

import os
from pathlib import Path
from typing import Optional

from core.config import Config
from core.encryption.cipher import Cipher
from core.exceptions import InvalidKeyError, KeyFileError
from core.utils import console


class KeyManager:
    """
    Owns the lifecycle of the symmetric key.

    The key lives in a single file (`~/.psswrdmngr_key` by default). Once that
    file exists it is never rewritten: there is no rotation or re-keying.
    """

    def __init__(self, key_path: Optional[Path] = None):
        self.key_path = Path(key_path) if key_path else Config.key_path()

    def load_or_create(self) -> bytes:
        """
        Return the stored key, generating and persisting a new one if the key
        file does not exist yet.

        Raises:
            InvalidKeyError: If the key file holds something that is not a key
            KeyFileError: If the key file cannot be read or written
        """
        if self.key_path.exists():
            return self._read_key()

        key = Cipher.generate_key()
        try:
            self._write_key(key)
        except FileExistsError:
            # Another invocation created it first; that key wins.
            return self._read_key()
        except OSError as e:
            raise KeyFileError(f"Unable to write key file {self.key_path}: {e}") from e

        console.info(f"Generated new encryption key at {self.key_path}")
        return key

    def cipher(self) -> Cipher:
        return Cipher(self.load_or_create())

    def _read_key(self) -> bytes:
        try:
            key = self.key_path.read_bytes().strip()
        except OSError as e:
            raise KeyFileError(f"Unable to read key file {self.key_path}: {e}") from e

        try:
            Cipher(key)
        except InvalidKeyError as e:
            raise InvalidKeyError(
                f"Key file {self.key_path} does not contain a valid key."
            ) from e

        console.debug(f"Loaded key from {self.key_path}")
        return key

    def _write_key(self, key: bytes) -> None:
        fd = os.open(self.key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(key)
        except BaseException:
            # A partial key file would block every later run.
            self.key_path.unlink(missing_ok=True)
            raise
