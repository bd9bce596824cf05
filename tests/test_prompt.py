"""Tests for the numbered-choice prompt."""

from __future__ import annotations

import io

import pytest

from vmlogin.errors import InvalidDefaultIndex
from vmlogin.prompt import ConsoleUI, ask, ask_from_list

CHOICES = ['first', 'second', 'third']


def test_blank_input_returns_default(scripted_ui) -> None:
    ui = scripted_ui([''])
    assert ask_from_list(ui, 'Pick one', CHOICES, 0) == 0
    assert len(ui.prompts) == 1


def test_numeric_input_is_one_based(scripted_ui) -> None:
    ui = scripted_ui(['2'])
    assert ask_from_list(ui, 'Pick one', CHOICES, 0) == 1


def test_out_of_range_reprompts(scripted_ui) -> None:
    ui = scripted_ui(['5', '0', '-1', '3'])
    assert ask_from_list(ui, 'Pick one', CHOICES, 0) == 2
    assert len(ui.prompts) == 4


def test_garbage_reprompts(scripted_ui) -> None:
    ui = scripted_ui(['abc', '1.5', ' 1 '])
    assert ask_from_list(ui, 'Pick one', CHOICES) == 0
    assert len(ui.prompts) == 3


def test_blank_without_default_reprompts(scripted_ui) -> None:
    ui = scripted_ui(['', '   ', '3'])
    assert ask_from_list(ui, 'Pick one', CHOICES) == 2
    assert len(ui.prompts) == 3


@pytest.mark.parametrize('default_index', [5, 3, -1])
def test_bad_default_raises_before_reading(scripted_ui, default_index) -> None:
    ui = scripted_ui([])
    with pytest.raises(InvalidDefaultIndex):
        ask_from_list(ui, 'Pick one', CHOICES, default_index)
    assert ui.prompts == []


def test_prompt_renders_numbered_list_and_default(scripted_ui) -> None:
    ui = scripted_ui([''])
    ask_from_list(ui, 'Pick one', CHOICES, 1)
    text, echo = ui.prompts[0]
    assert echo is True
    assert text == (
        'Pick one\n\n1. first\n2. second\n3. third\n\nEnter choice number: [2] '
    )


def test_prompt_without_default_has_no_hint(scripted_ui) -> None:
    ui = scripted_ui(['1'])
    ask_from_list(ui, 'Pick one', CHOICES)
    assert ui.prompts[0][0].endswith('Enter choice number: ')


def test_console_ui_routes_hidden_input_to_getpass() -> None:
    seen = []
    ui = ConsoleUI(
        input_func=lambda msg: seen.append(('input', msg)) or 'visible',
        getpass_func=lambda msg: seen.append(('getpass', msg)) or 'hidden',
        stream=io.StringIO(),
    )
    assert ask(ui, 'Name:') == 'visible'
    assert ask(ui, 'Secret:', echo=False) == 'hidden'
    assert seen == [('input', 'Name: '), ('getpass', 'Secret: ')]


def test_console_ui_info_and_warn_write_to_stream() -> None:
    stream = io.StringIO()
    ui = ConsoleUI(stream=stream)
    ui.info('hello')
    ui.warn('careful')
    assert stream.getvalue() == 'hello\nWARNING: careful\n'
