"""
Vault Store - JSON-backed map of entry names to encrypted credentials.
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.exceptions import EntrySchemaError, InvalidVaultSchemaError, VaultIOError
from core.utils import console
from core.vault.request import normalize_name


@dataclass(frozen=True)
class Entry:
    """One stored credential; both fields hold ciphertext."""

    username: str
    password: str

    def to_dict(self) -> Dict[str, str]:
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_dict(cls, name: str, raw: Any) -> "Entry":
        """
        Raises:
            EntrySchemaError: If the record is not an object with string
                username and password fields
        """
        if not isinstance(raw, dict):
            raise EntrySchemaError(name, "record is not an object")
        for key in ("username", "password"):
            if key not in raw:
                raise EntrySchemaError(name, f"missing '{key}' field")
            if not isinstance(raw[key], str):
                raise EntrySchemaError(name, f"'{key}' is not a string")
        return cls(username=raw["username"], password=raw["password"])


class VaultStore:
    """
    Reads and writes the vault file.

    The map is only held for a single load -> mutate -> persist cycle. There
    is no locking: two processes updating the same file concurrently can
    lose one of the updates.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        """
        Load the vault map, creating an empty vault file if none exists.

        Raises:
            InvalidVaultSchemaError: If the file is not a JSON object
            VaultIOError: If the file cannot be read or created
        """
        if not self.path.exists():
            console.debug(f"Vault file not found, creating {self.path}")
            self._persist({})
            return {}

        try:
            contents = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidVaultSchemaError(self.path, "file is not valid UTF-8") from e
        except OSError as e:
            raise VaultIOError(f"Unable to read vault file {self.path}: {e}") from e

        try:
            data = json.loads(contents)
        except json.JSONDecodeError as e:
            raise InvalidVaultSchemaError(self.path, f"invalid JSON ({e.msg})") from e

        if not isinstance(data, dict):
            raise InvalidVaultSchemaError(self.path)
        return data

    def get(self, name: str) -> Optional[Entry]:
        """
        Look up an entry. Returns None when the name is not in the vault.

        Raises:
            EntrySchemaError: If the stored record is malformed
        """
        name = normalize_name(name)
        data = self.load()
        if name not in data:
            return None
        return Entry.from_dict(name, data[name])

    def upsert(self, name: str, entry: Entry) -> None:
        """Insert or replace the entry stored under name."""
        data = self.load()
        data[normalize_name(name)] = entry.to_dict()
        self._persist(data)

    def delete(self, name: str) -> bool:
        """
        Remove an entry. The vault is rewritten whether or not anything was
        removed.

        Returns:
            bool: True if the entry was present
        """
        name = normalize_name(name)
        data = self.load()
        present = name in data
        data.pop(name, None)
        self._persist(data)
        return present

    def _persist(self, data: Dict[str, Any]) -> None:
        """Write the whole map to a temp file and move it over the vault file."""
        temp_path = None
        try:
            # mkstemp creates the file with 0600 and a name unique to this write.
            fd, name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            temp_path = Path(name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(data, indent=2))
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise VaultIOError(f"Unable to write vault file {self.path}: {e}") from e
