from __future__ import annotations

import io

import pytest

from vmlogin.prompt import ConsoleUI


class ScriptedUI(ConsoleUI):
    """ConsoleUI that answers prompts from a fixed script and records them."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.prompts: list[tuple[str, bool]] = []
        super().__init__(
            input_func=self._next,
            getpass_func=self._next,
            stream=io.StringIO(),
        )

    def ask(self, message: str, *, echo: bool = True) -> str:
        self.prompts.append((message, echo))
        return super().ask(message, echo=echo)

    def _next(self, message: str) -> str:
        if not self.answers:
            raise AssertionError(f'Unexpected prompt: {message!r}')
        return self.answers.pop(0)

    @property
    def output(self) -> str:
        return self.stream.getvalue()


@pytest.fixture
def scripted_ui():
    return ScriptedUI
