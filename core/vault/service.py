"""
Vault Service - Runs a completed request against the vault file.
"""

from typing import Callable, Dict, List, Optional

from core.config import Config
from core.encryption.cipher import Cipher
from core.exceptions import EntryNotFoundError, IncompleteRequestError
from core.utils import console
from core.vault.request import Operation, Request
from core.vault.store import Entry, VaultStore


class VaultService:
    """
    Dispatches add, get and remove to the store, encrypting and decrypting
    fields with the cipher it was built with.
    """

    def __init__(self, cipher: Cipher):
        self.cipher = cipher
        self._handlers: Dict[Operation, Callable[[Request], List[str]]] = {
            Operation.ADD: self._execute_add,
            Operation.REMOVE: self._execute_remove,
            Operation.GET: self._execute_get,
        }

    def store_for(self, file: Optional[str] = None) -> VaultStore:
        return VaultStore(Config.vault_path(file))

    def execute(self, request: Request) -> List[str]:
        """
        Run a complete request.

        Returns:
            List[str]: Lines to print; [username, password] for get, empty
                otherwise.

        Raises:
            IncompleteRequestError: If a required field is still missing
        """
        missing = request.missing()
        if missing:
            names = ", ".join(field.value for field in missing)
            raise IncompleteRequestError(
                f"Cannot {request.operation.value}: missing {names}."
            )
        return self._handlers[request.operation](request)

    def get(self, name: str, file: Optional[str] = None) -> List[str]:
        """
        Decrypt the credentials stored under name.

        Raises:
            EntryNotFoundError: If there is no entry with that name
            EntrySchemaError: If the entry lacks its username/password fields
            DecryptionError: If a field cannot be decrypted with this key
        """
        entry = self.store_for(file).get(name)
        if entry is None:
            raise EntryNotFoundError(name)
        return [
            self.cipher.decrypt_text(entry.username),
            self.cipher.decrypt_text(entry.password),
        ]

    def add(
        self, name: str, username: str, password: str, file: Optional[str] = None
    ) -> None:
        entry = Entry(
            username=self.cipher.encrypt(username),
            password=self.cipher.encrypt(password),
        )
        store = self.store_for(file)
        store.upsert(name, entry)
        console.debug(f"Stored entry '{name}' in {store.path}")

    def remove(self, name: str, file: Optional[str] = None) -> bool:
        """
        Delete the entry stored under name. A missing entry is reported but
        is not an error.

        Returns:
            bool: True if an entry was removed
        """
        removed = self.store_for(file).delete(name)
        if not removed:
            console.info(f"No entry found for '{name}', nothing to remove.")
        return removed

    def _execute_get(self, request: Request) -> List[str]:
        return self.get(request.name, request.file)

    def _execute_add(self, request: Request) -> List[str]:
        self.add(request.name, request.username, request.password, request.file)
        return []

    def _execute_remove(self, request: Request) -> List[str]:
        self.remove(request.name, request.file)
        return []
