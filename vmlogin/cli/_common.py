from __future__ import annotations

from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..config import DEFAULT_CONFIG_NAME, LoginConfig, load
from ..properties import machine_data_dir

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all commands."""

    config = scfg.Value(
        None, help=f'Path to config TOML (default: {DEFAULT_CONFIG_NAME}).'
    )
    verbose = scfg.Value(
        0,
        short_alias=['v'],
        isflag='counter',
        help='Increase verbosity (-v, -vv).',
    )
    machine = scfg.Value('', help='Machine (VM) id to operate on.')
    data_dir = scfg.Value(
        '',
        help='Override the root directory for persisted machine data.',
    )


def _cfg_path(p: str | None) -> Path:
    return Path(p or DEFAULT_CONFIG_NAME).resolve()


def _load_cfg(config_path: str | None) -> LoginConfig:
    """Load the config file, falling back to defaults when the default path is absent."""
    path = _cfg_path(config_path)
    if not path.exists():
        if config_path is not None:
            raise FileNotFoundError(f'Config not found: {path}')
        log.debug('No config at {}; using defaults', path)
        return LoginConfig()
    return load(path).expanded_paths()


def _require_machine(machine: str) -> str:
    machine_id = str(machine or '').strip()
    if not machine_id:
        raise RuntimeError('--machine is required.')
    return machine_id


def _data_dir_for(args, cfg: LoginConfig, machine_id: str) -> Path:
    root = str(args.data_dir or '').strip() or cfg.paths.data_dir
    return machine_data_dir(machine_id, root or None)


__all__ = [name for name in globals() if not name.startswith('__')]
