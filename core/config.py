import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from core.exceptions import HomeDirectoryError, VaultIOError

load_dotenv()


class Config:
    KEY_FILENAME = ".psswrdmngr_key"
    VAULT_FILENAME = ".psswrdmngr.json"

    VAULT_FILE = os.getenv("PSSWRDMNGR_VAULT_FILE")
    DEBUG = os.getenv("PSSWRDMNGR_DEBUG", "").lower() in ("1", "true", "yes")

    @staticmethod
    def home_dir() -> Path:
        try:
            return Path.home()
        except (RuntimeError, KeyError) as e:
            raise HomeDirectoryError() from e

    @classmethod
    def key_path(cls) -> Path:
        return cls.home_dir() / cls.KEY_FILENAME

    @classmethod
    def vault_path(cls, file: Optional[str] = None) -> Path:
        """
        Resolve the vault file: explicit argument, then PSSWRDMNGR_VAULT_FILE,
        then the default file in the home directory.
        """
        if file:
            return cls._expand(file)
        if cls.VAULT_FILE:
            return cls._expand(cls.VAULT_FILE)
        return cls.home_dir() / cls.VAULT_FILENAME

    @staticmethod
    def _expand(file: str) -> Path:
        try:
            return Path(file).expanduser()
        except (RuntimeError, KeyError) as e:
            raise VaultIOError(f"Unable to resolve vault file path {file}: {e}") from e
