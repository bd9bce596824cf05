"""Operator-facing prompt channel and the numbered-choice selection loop."""

from __future__ import annotations

import getpass
import sys
from typing import Callable, Optional, Sequence, TextIO

from loguru import logger

from .errors import InvalidDefaultIndex

log = logger


class ConsoleUI:
    """
    Interaction context handed to the resolvers.

    Every prompt goes through :meth:`ask` so that tests (and embedding
    tools) can swap the input callables for scripted ones.
    """

    def __init__(
        self,
        *,
        input_func: Optional[Callable[[str], str]] = None,
        getpass_func: Optional[Callable[[str], str]] = None,
        stream: Optional[TextIO] = None,
    ):
        self.input_func = input_func or input
        self.getpass_func = getpass_func or getpass.getpass
        self.stream = stream

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def info(self, message: str) -> None:
        print(message, file=self._out())

    def warn(self, message: str) -> None:
        print(f'WARNING: {message}', file=self._out())

    def ask(self, message: str, *, echo: bool = True) -> str:
        if echo:
            return self.input_func(message)
        return self.getpass_func(message)


def ask(ui: ConsoleUI, message: str, *, echo: bool = True) -> str:
    return ui.ask(f'{message} ', echo=echo).strip()


def _render_choices(choices: Sequence[object]) -> str:
    return '\n'.join(f'{i + 1}. {choice}' for i, choice in enumerate(choices))


def _parse_choice(
    raw: str, count: int, default_index: Optional[int]
) -> Optional[int]:
    text = raw.strip()
    if not text:
        return default_index
    try:
        index = int(text, 10) - 1
    except ValueError:
        return None
    if 0 <= index < count:
        return index
    return None


def ask_from_list(
    ui: ConsoleUI,
    message: str,
    choices: Sequence[object],
    default_index: Optional[int] = None,
) -> int:
    """
    Show ``choices`` as a numbered list and ask the operator to pick one.

    Choices are displayed starting at 1; the return value is the 0-based
    index of the selection. ``default_index`` is also 0-based and is used
    when the operator enters a blank line. Invalid input re-prompts until a
    usable number is entered.

    Args:
        ui: interaction context used to read input.
        message: question shown above the list.
        choices: displayable items, rendered with ``str``.
        default_index: optional 0-based default.

    Returns:
        int: the selected 0-based index.

    Raises:
        InvalidDefaultIndex: if ``default_index`` is out of range.
    """
    count = len(choices)
    if default_index is not None and not (0 <= default_index < count):
        raise InvalidDefaultIndex(default_index, count)

    default_hint = f' [{default_index + 1}]' if default_index is not None else ''
    prompt = '\n\n'.join(
        [message, _render_choices(choices), f'Enter choice number:{default_hint} ']
    )
    while True:
        raw = ui.ask(prompt)
        index = _parse_choice(raw or '', count, default_index)
        if index is not None:
            log.debug('Selected choice {} of {}: {}', index + 1, count, choices[index])
            return index
        log.debug('Rejected choice input {!r}', raw)
