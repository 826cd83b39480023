"""
Exceptions - Error taxonomy for the password manager.

Every error raised by the core derives from VaultError so the CLI can report
it with a single handler.
"""


class VaultError(Exception):
    """Base class for every password manager error."""


# Configuration / environment


class ConfigurationError(VaultError):
    pass


class HomeDirectoryError(ConfigurationError):
    def __init__(self):
        super().__init__("Your OS does not seem to have a home directory.")


class InvalidKeyError(ConfigurationError):
    pass


class KeyFileError(ConfigurationError):
    pass


# Validation


class ValidationError(VaultError):
    pass


class MultipleOperationsError(ValidationError):
    def __init__(self):
        super().__init__(
            "Too many operations selected: use only one of --add, --remove, --get."
        )


class InvalidOperationError(ValidationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown operation: {value!r} (expected a, r or g).")


class UnknownFieldError(ValidationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown field: {value!r}")


class IncompleteRequestError(ValidationError):
    pass


class PromptAbortedError(ValidationError):
    pass


# Schema


class SchemaError(VaultError):
    pass


class InvalidVaultSchemaError(SchemaError):
    def __init__(self, path, reason: str = "file does not contain a JSON object"):
        self.path = path
        super().__init__(f"Invalid vault schema in {path}: {reason}.")


class EntrySchemaError(SchemaError):
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Invalid schema for entry '{name}': {reason}.")


# Crypto / lookup / storage


class DecryptionError(VaultError):
    pass


class EntryNotFoundError(VaultError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No entry found for '{name}'.")


class VaultIOError(VaultError):
    pass
