"""Top-level modal CLI wiring, argv handling, and logging setup."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..inventory import InventoryProvider
from ..properties import properties_path, read_properties
from ..prompt import ConsoleUI
from ..setup import SetupContext, run_setup
from ..util import mask_secret
from ._common import (
    _BaseCommand,
    _data_dir_for,
    _load_cfg,
    _require_machine,
    log,
)


class SetupCLI(_BaseCommand):
    """Resolve and persist how to reach and log into a machine."""

    inventory = scfg.Value(
        '',
        help='Inventory TOML with VM and VPN metadata (default: provider.inventory).',
    )
    display_name = scfg.Value('', help='Display name for the machine in prompts.')

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        machine_id = _require_machine(args.machine)
        inventory = str(args.inventory or '').strip() or cfg.provider.inventory
        if not inventory:
            raise RuntimeError(
                'No inventory configured. Pass --inventory or set provider.inventory.'
            )
        provider = InventoryProvider.load(Path(inventory))
        data_dir = _data_dir_for(args, cfg, machine_id)
        ctx = SetupContext(
            machine_id=machine_id,
            data_dir=data_dir,
            machine_name=str(args.display_name or '').strip(),
            username=cfg.ssh.username or None,
            host=cfg.ssh.host or None,
            port=cfg.ssh.port or None,
            vpn_url=cfg.provider.vpn_url or None,
            region=cfg.provider.region,
        )
        ctx.merge_known(read_properties(data_dir))
        conn = run_setup(ConsoleUI(), provider, ctx)
        print(f'Saved connection to {properties_path(data_dir)}')
        print(f'  {conn.username}@{conn.host}:{conn.port}')
        return 0


class ShowCLI(_BaseCommand):
    """Show the persisted connection record for a machine."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        machine_id = _require_machine(args.machine)
        data_dir = _data_dir_for(args, cfg, machine_id)
        props = read_properties(data_dir)
        if not props:
            print(f'No saved connection for machine {machine_id}.')
            return 1
        print(f'# {properties_path(data_dir)}')
        for key in ('username', 'host', 'port'):
            print(f'{key}: {props.get(key, "")}')
        print(f'password: {mask_secret(str(props.get("password", "")))}')
        return 0


class VMLoginModalCLI(scfg.ModalCLI):
    """Resolve SSH routing and credentials for provisioned VMs."""

    setup = SetupCLI
    show = ShowCLI


def main(argv: list[str] | None = None) -> None:
    verbosity = 1
    if argv is None:
        argv = sys.argv[1:]
    config_value = None
    if '--config' in argv:
        try:
            config_value = argv[argv.index('--config') + 1]
        except IndexError:
            pass
    try:
        verbosity = _load_cfg(config_value).verbosity
    except Exception:
        verbosity = 1

    _setup_logging(_count_verbose(argv), verbosity)

    try:
        rc = VMLoginModalCLI.main(argv=argv, _noexit=True)
    except Exception as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('Unhandled vmlogin error: {}', ex)
        sys.exit(2)

    if any(flag in argv for flag in ('-h', '--help')):
        sys.exit(0)
    if isinstance(rc, int):
        sys.exit(rc)
    sys.exit(0)


LOG_FORMAT = (
    '<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>'
)


def _log_level(verbosity: int) -> str:
    if verbosity <= 0:
        return 'WARNING'
    return 'INFO' if verbosity == 1 else 'DEBUG'


def _setup_logging(args_verbose: int, cfg_verbosity: int, sink=None) -> None:
    """Route loguru to stderr; -v flags override the configured verbosity."""
    logger.remove()
    level = _log_level(args_verbose or cfg_verbosity)
    sink = sink if sink is not None else sys.stderr
    colorize = sink.isatty() and os.getenv('NO_COLOR') is None
    logger.add(sink, level=level, colorize=colorize, format=LOG_FORMAT)
    log.debug('Logging configured at {}', level)


def _count_verbose(argv: list[str]) -> int:
    # Counts --verbose and stacked short flags such as -vv.
    return sum(
        1 if item == '--verbose' else len(item) - 1
        for item in argv
        if item == '--verbose'
        or (len(item) > 1 and item[0] == '-' and set(item[1:]) == {'v'})
    )
