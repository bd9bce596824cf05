"""Sequence routing and credential resolution, then persist the result."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger

from .credentials import resolve_credentials
from .errors import MachineNotFoundError
from .inventory import Provider
from .models import DEFAULT_SSH_PORT, VM, ResolvedConnection
from .prompt import ConsoleUI
from .properties import write_properties
from .routing import resolve_routing

log = logger


@dataclass
class SetupContext:
    machine_id: str
    data_dir: Path
    machine_name: str = ''
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    vpn_url: Optional[str] = None
    region: str = ''

    def merge_known(self, props: Mapping[str, Any]) -> 'SetupContext':
        """Fill unset fields from previously persisted properties."""
        saved_user = props.get('username') or None
        self.username = self.username or saved_user
        # A saved password only belongs to the saved username.
        if not self.password and saved_user and self.username == saved_user:
            self.password = props.get('password') or None
        self.host = self.host or props.get('host') or None
        if not self.port and props.get('port'):
            self.port = int(props['port'])
        return self


def current_vm(provider: Provider, ctx: SetupContext) -> VM:
    vm = provider.get_vm(ctx.machine_id)
    if vm is None:
        raise MachineNotFoundError(f'No VM found for machine id {ctx.machine_id}')
    return vm


def run_setup(
    ui: ConsoleUI, provider: Provider, ctx: SetupContext
) -> ResolvedConnection:
    """
    Resolve how to reach and log into the machine, then persist it.

    Routing always runs before credentials. Nothing is written unless both
    steps succeed.
    """
    vm = current_vm(provider, ctx)
    name = ctx.machine_name or vm.name or vm.id
    port = ctx.port or DEFAULT_SSH_PORT

    log.debug('Resolving routing for {}', name)
    host, port = resolve_routing(
        ui,
        vm,
        lambda: provider.list_vpns(ctx.region),
        host=ctx.host,
        port=port,
        vpn_url=ctx.vpn_url,
        machine_name=name,
    )
    log.debug('Resolving credentials for {}', name)
    username, password = resolve_credentials(
        ui,
        vm,
        username=ctx.username,
        password=ctx.password,
        machine_name=name,
    )
    conn = ResolvedConnection(
        username=username, password=password, host=host, port=int(port)
    )
    write_properties(ctx.data_dir, conn.as_properties())
    log.info('Connection for {}: {}@{}:{}', name, username, host, port)
    return conn
