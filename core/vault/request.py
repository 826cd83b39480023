"""
Request - What the user asked for: an operation plus the fields it needs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from core.exceptions import (
    InvalidOperationError,
    MultipleOperationsError,
    UnknownFieldError,
)


def normalize_name(name: str) -> str:
    """Entry names are stored and looked up lowercased."""
    return name.lower()


class Operation(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    GET = "get"

    @classmethod
    def parse(cls, value: str) -> "Operation":
        """
        Convert user input to an Operation. Accepts the full names and the
        one-letter aliases a, r and g.

        Raises:
            InvalidOperationError: If the input names no operation
        """
        text = value.strip().lower()
        for operation in cls:
            if text in (operation.value, operation.value[0]):
                return operation
        raise InvalidOperationError(value)

    @property
    def required_fields(self) -> List["Field"]:
        if self is Operation.ADD:
            return [Field.NAME, Field.USERNAME, Field.PASSWORD]
        return [Field.NAME]


class Field(str, Enum):
    NAME = "name"
    USERNAME = "username"
    PASSWORD = "password"
    FILE = "file"

    @classmethod
    def parse(cls, value: Union[str, "Field"]) -> "Field":
        if isinstance(value, Field):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise UnknownFieldError(value) from e


# Applied on assignment; fields not listed are stored verbatim.
_NORMALIZERS: Dict[Field, Callable[[str], str]] = {
    Field.NAME: normalize_name,
}


@dataclass
class Request:
    operation: Operation = Operation.GET
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    file: Optional[str] = None
    operation_selected: bool = False

    @classmethod
    def from_flags(
        cls,
        add: bool = False,
        remove: bool = False,
        get: bool = False,
        name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        file: Optional[str] = None,
    ) -> "Request":
        """
        Build a draft request from command-line flags.

        Raises:
            MultipleOperationsError: If more than one operation flag is set
        """
        selected = [
            operation
            for operation, flag in (
                (Operation.ADD, add),
                (Operation.REMOVE, remove),
                (Operation.GET, get),
            )
            if flag
        ]
        if len(selected) > 1:
            raise MultipleOperationsError()

        request = cls()
        if selected:
            request.select(selected[0])
        for field, value in (
            (Field.NAME, name),
            (Field.USERNAME, username),
            (Field.PASSWORD, password),
            (Field.FILE, file),
        ):
            if value is not None:
                request.set(field, value)
        return request

    def select(self, operation: Operation) -> None:
        self.operation = operation
        self.operation_selected = True

    def set(self, field: Union[str, Field], value: Optional[str]) -> None:
        field = Field.parse(field)
        if value is not None and field in _NORMALIZERS:
            value = _NORMALIZERS[field](value)
        setattr(self, field.value, value)

    def get(self, field: Union[str, Field]) -> Optional[str]:
        return getattr(self, Field.parse(field).value)

    def is_empty(self) -> bool:
        """True when no flag at all was given."""
        return not self.operation_selected and all(
            self.get(field) is None for field in Field
        )

    def missing(self) -> List[Field]:
        """Required fields still unset, in name, username, password order."""
        return [
            field
            for field in self.operation.required_fields
            if self.get(field) is None
        ]

    def is_complete(self) -> bool:
        return not self.missing()
