import tempfile
from pathlib import Path
from typing import List

import pytest
from dotenv import load_dotenv

from core.config import Config
from core.vault.request import Field
from core.vault.resolver import Prompter


@pytest.fixture(autouse=True, scope="session")
def load_test_env():
    """
    Automatically load environment variables from `.env.test` for all test sessions.
    """
    env_path = Path(".env.test")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=True)
        print("📦 Test environment loaded from .env.test")
    else:
        print("⚠️  No .env.test file found. Using default environment.")


@pytest.fixture
def temp_home(monkeypatch):
    """Point the home directory at a fresh temporary directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        home = Path(tmp_dir)
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.setenv("USERPROFILE", str(home))
        monkeypatch.setattr(Config, "VAULT_FILE", None)
        yield home


class ScriptedPrompter(Prompter):
    """Prompter answering from a fixed script, recording what was asked."""

    def __init__(self, answers: List[str] = (), operations: List[str] = ()):
        self.answers = list(answers)
        self.operations = list(operations)
        self.asked: List[Field] = []
        self.operation_prompts = 0

    def ask(self, field: Field) -> str:
        self.asked.append(field)
        return self.answers.pop(0)

    def choose_operation(self) -> str:
        self.operation_prompts += 1
        return self.operations.pop(0)


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter
