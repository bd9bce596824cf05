"""Per-machine persisted connection properties."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping

import ubelt as ub

from .util import emit_toml_kv, log

PROPERTIES_FILE = 'vm_properties.toml'
PROPERTY_KEYS = ('username', 'password', 'host', 'port')


def machine_data_dir(machine_id: str, root: str | Path | None = None) -> Path:
    if root:
        base = Path(root)
    else:
        base = Path(ub.Path.appdir('vmlogin', type='data').ensuredir())
    return base / 'machines' / machine_id


def properties_path(data_dir: Path) -> Path:
    return Path(data_dir) / PROPERTIES_FILE


def read_properties(data_dir: Path) -> dict[str, Any]:
    fpath = properties_path(data_dir)
    if not fpath.exists():
        return {}
    raw = tomllib.loads(fpath.read_text(encoding='utf-8'))
    return {k: raw[k] for k in PROPERTY_KEYS if k in raw}


def write_properties(data_dir: Path, props: Mapping[str, Any]) -> Path:
    fpath = properties_path(data_dir)
    fpath.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = []
    for key in PROPERTY_KEYS:
        val = props.get(key)
        if val is None:
            continue
        emit_toml_kv(lines, key, val)
    fpath.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    log.debug('Wrote machine properties to {}', fpath)
    return fpath
