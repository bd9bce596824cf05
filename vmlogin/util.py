"""Shared utility helpers for path expansion, TOML emission, and masking."""

from __future__ import annotations

import os

from loguru import logger

log = logger


def expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if (code < 0x20 and ch != '\t') or code == 0x7F:
        return f'\\u{code:04X}'
    return ch


def toml_escape(s: str) -> str:
    out = s.replace('\\', '\\\\').replace('"', '\\"')
    return ''.join(_escape_char(ch) for ch in out)


def emit_toml_kv(lines: list[str], key: str, val: object) -> None:
    if isinstance(val, bool):
        lines.append(f'{key} = {"true" if val else "false"}')
    elif isinstance(val, int):
        lines.append(f'{key} = {val}')
    elif isinstance(val, list):
        parts = [f'"{toml_escape(str(item))}"' for item in val]
        lines.append(f'{key} = [{", ".join(parts)}]')
    else:
        lines.append(f'{key} = "{toml_escape(str(val))}"')


def mask_secret(value: str) -> str:
    return '*' * 8 if value else '(empty)'
