"""TOML-backed data source for VM, interface, credential, and VPN metadata."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional, Protocol

from loguru import logger

from .errors import InventoryError
from .models import (
    VM,
    CredentialCandidate,
    Network,
    NetworkInterface,
    PublicIp,
    PublishedService,
    Vpn,
)

log = logger


class Provider(Protocol):
    def get_vm(self, machine_id: str) -> Optional[VM]: ...

    def list_vpns(self, region: str) -> list[Vpn]: ...


def _str(item: dict, key: str, default: str = '') -> str:
    return str(item.get(key, default) or default).strip()


def _public_ip(item: Any) -> PublicIp:
    if isinstance(item, str):
        return PublicIp(address=item.strip())
    if not isinstance(item, dict):
        raise InventoryError(f'Bad public IP entry: {item!r}')
    return PublicIp(
        address=_str(item, 'address'),
        attached_interface=_str(item, 'attached_interface'),
    )


def _published_service(item: Any) -> PublishedService:
    if not isinstance(item, dict):
        raise InventoryError(f'Bad published service entry: {item!r}')
    try:
        return PublishedService(
            id=_str(item, 'id'),
            internal_port=int(item.get('internal_port', 0)),
            external_ip=_str(item, 'external_ip'),
            external_port=int(item.get('external_port', 0)),
        )
    except (TypeError, ValueError) as ex:
        raise InventoryError(f'Bad port in published service {item!r}') from ex


def _interface(item: Any) -> NetworkInterface:
    if not isinstance(item, dict):
        raise InventoryError(f'Bad interface entry: {item!r}')
    net = item.get('network', {})
    if not isinstance(net, dict):
        raise InventoryError(f'Bad network entry on interface: {net!r}')
    nat = item.get('nat_addresses', {})
    if not isinstance(nat, dict):
        raise InventoryError(f'Bad nat_addresses on interface: {nat!r}')
    return NetworkInterface(
        id=_str(item, 'id'),
        network=Network(
            id=_str(net, 'id'),
            name=_str(net, 'name'),
            subnet=_str(net, 'subnet'),
        ),
        ip=_str(item, 'ip'),
        hostname=_str(item, 'hostname'),
        nat_addresses={str(k): str(v) for k, v in nat.items()},
        public_ips=tuple(_public_ip(p) for p in item.get('public_ips', [])),
        available_ips=tuple(
            _public_ip(p) for p in item.get('available_ips', [])
        ),
        published_services=tuple(
            _published_service(s) for s in item.get('published_services', [])
        ),
    )


def _vm(item: dict) -> VM:
    creds = []
    for raw in item.get('credentials', []):
        if isinstance(raw, dict):
            creds.append(
                CredentialCandidate(
                    username=_str(raw, 'username'),
                    password=str(raw.get('password', '') or ''),
                )
            )
        else:
            creds.append(CredentialCandidate.from_text(str(raw)))
    return VM(
        id=_str(item, 'id'),
        name=_str(item, 'name'),
        interfaces=tuple(_interface(i) for i in item.get('interfaces', [])),
        credentials=tuple(creds),
    )


def _vpn(item: dict) -> Vpn:
    return Vpn(
        id=_str(item, 'id'),
        name=_str(item, 'name'),
        enabled=bool(item.get('enabled', True)),
        nat_enabled=bool(item.get('nat_enabled', False)),
        local_subnet=_str(item, 'local_subnet'),
        region=_str(item, 'region'),
    )


class InventoryProvider:
    """Serves VM and VPN records from an inventory TOML file."""

    def __init__(self, vms: list[VM], vpns: list[Vpn]):
        self.vms = vms
        self.vpns = vpns

    @classmethod
    def load(cls, path: Path) -> 'InventoryProvider':
        fpath = Path(path)
        if not fpath.exists():
            raise FileNotFoundError(f'Inventory not found: {fpath}')
        try:
            raw = tomllib.loads(fpath.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as ex:
            raise InventoryError(f'Cannot parse inventory {fpath}: {ex}') from ex
        vms = [
            _vm(item)
            for item in raw.get('vms', [])
            if isinstance(item, dict) and _str(item, 'id')
        ]
        vpns = [
            _vpn(item)
            for item in raw.get('vpns', [])
            if isinstance(item, dict) and _str(item, 'id')
        ]
        log.debug(
            'Loaded inventory {} (vms={}, vpns={})', fpath, len(vms), len(vpns)
        )
        return cls(vms, vpns)

    def get_vm(self, machine_id: str) -> Optional[VM]:
        for vm in self.vms:
            if vm.id == machine_id:
                return vm
        return None

    def list_vpns(self, region: str) -> list[Vpn]:
        log.debug('Listing VPNs for region={}', region or '(any)')
        if not region:
            return list(self.vpns)
        return [v for v in self.vpns if not v.region or v.region == region]
