"""
Terminal prompts used to fill in incomplete requests.
"""

import questionary
import typer

from core.exceptions import PromptAbortedError
from core.vault.request import Field, Operation
from core.vault.resolver import Prompter


class TerminalPrompter(Prompter):
    def ask(self, field: Field) -> str:
        return typer.prompt(
            f"Enter {field.value}", hide_input=field is Field.PASSWORD
        )

    def choose_operation(self) -> str:
        answer = questionary.select(
            "Enter action:",
            choices=[
                questionary.Choice("r - remove", value=Operation.REMOVE.value),
                questionary.Choice("a - add", value=Operation.ADD.value),
                questionary.Choice("g - get", value=Operation.GET.value),
            ],
            default=Operation.GET.value,
            use_indicator=True,
            style=questionary.Style(
                [
                    ("selected", "fg:cyan bold"),
                    ("pointer", "fg:cyan bold"),
                    ("highlighted", "fg:cyan bold"),
                ]
            ),
        ).ask()

        if not answer:
            raise PromptAbortedError("No action selected.")
        return answer
