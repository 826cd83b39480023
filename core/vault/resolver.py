"""
Command Resolver - Completes a request by prompting for whatever it is missing.
"""

from abc import ABC, abstractmethod

from core.exceptions import InvalidOperationError
from core.utils import console
from core.vault.request import Field, Operation, Request


class Prompter(ABC):
    """
    Abstract source of interactive answers.
    """

    @abstractmethod
    def ask(self, field: Field) -> str:
        """
        Ask the user for the value of a single field.

        Args:
            field (Field): The field being collected.

        Returns:
            str: The raw answer.
        """
        pass

    @abstractmethod
    def choose_operation(self) -> str:
        """
        Ask the user which operation to run.

        Returns:
            str: The raw answer, parsed with Operation.parse.
        """
        pass


class CommandResolver:
    """
    Drives a draft Request to completion.

    A complete request is returned untouched. Otherwise the user is first asked
    for an operation (only when no flag at all was given), then for each
    missing field in name, username, password order.
    """

    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    def resolve(self, request: Request) -> Request:
        if request.is_complete():
            return request

        console.info("Input is invalid/incomplete...")

        if request.is_empty():
            request.select(self._collect_operation())

        while True:
            missing = request.missing()
            if not missing:
                break
            field = missing[0]
            value = self.prompter.ask(field).rstrip()
            if not value:
                console.error(f"{field.value.capitalize()} cannot be empty.")
                continue
            request.set(field, value)

        return request

    def _collect_operation(self) -> Operation:
        while True:
            answer = self.prompter.choose_operation()
            try:
                return Operation.parse(answer)
            except InvalidOperationError as e:
                console.error(str(e))
