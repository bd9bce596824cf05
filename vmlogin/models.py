"""VM metadata records and the connection/credential candidates built from them."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, field
from typing import Optional, Protocol

DEFAULT_SSH_PORT = 22
PROVIDER_NAME = 'Skytap'


@dataclass(frozen=True)
class Network:
    id: str
    name: str = ''
    subnet: str = ''


@dataclass(frozen=True)
class PublicIp:
    address: str
    # Interface id this IP is currently attached to, if any.
    attached_interface: str = ''


@dataclass(frozen=True)
class PublishedService:
    id: str
    internal_port: int
    external_ip: str = ''
    external_port: int = 0


@dataclass(frozen=True)
class NetworkInterface:
    id: str
    network: Network
    ip: str = ''
    hostname: str = ''
    # VPN id -> NAT address of this interface inside that VPN.
    nat_addresses: dict[str, str] = field(default_factory=dict)
    public_ips: tuple[PublicIp, ...] = ()
    available_ips: tuple[PublicIp, ...] = ()
    published_services: tuple[PublishedService, ...] = ()

    def nat_address_for(self, vpn_id: str) -> str:
        return self.nat_addresses.get(vpn_id, '')


@dataclass(frozen=True)
class Vpn:
    id: str
    name: str = ''
    enabled: bool = True
    nat_enabled: bool = False
    local_subnet: str = ''
    region: str = ''

    def subsumes(self, network: Network) -> bool:
        """True when this VPN's local address space covers ``network``."""
        if not self.local_subnet or not network.subnet:
            return False
        try:
            ours = ipaddress.ip_network(self.local_subnet, strict=False)
            theirs = ipaddress.ip_network(network.subnet, strict=False)
        except ValueError:
            return False
        if ours.version != theirs.version:
            return False
        return theirs.subnet_of(ours)  # type: ignore[arg-type]


class PathCandidate(Protocol):
    vpn: Optional[Vpn]

    def valid(self) -> bool: ...

    def label(self) -> str: ...

    def resolve(self) -> tuple[str, int]: ...


@dataclass(frozen=True)
class VpnChoice:
    vpn: Vpn
    iface: NetworkInterface

    @property
    def host(self) -> str:
        if self.vpn.nat_enabled:
            return self.iface.nat_address_for(self.vpn.id)
        return self.iface.ip

    def valid(self) -> bool:
        return self.vpn.enabled and bool(self.host)

    def label(self) -> str:
        return f'Use VPN: {self.vpn.name or self.vpn.id} ({self.host or "no address"})'

    def resolve(self) -> tuple[str, int]:
        return self.host, DEFAULT_SSH_PORT

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True)
class PublicIpChoice:
    ip: PublicIp
    iface: NetworkInterface
    vpn: Optional[Vpn] = None

    def valid(self) -> bool:
        attached = self.ip.attached_interface
        return bool(self.ip.address) and attached in ('', self.iface.id)

    def label(self) -> str:
        return f'Use public IP: {self.ip.address}'

    def resolve(self) -> tuple[str, int]:
        return self.ip.address, DEFAULT_SSH_PORT

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True)
class PublishedServiceChoice:
    service: PublishedService
    iface: NetworkInterface
    vpn: Optional[Vpn] = None

    def valid(self) -> bool:
        svc = self.service
        return (
            svc.internal_port == DEFAULT_SSH_PORT
            and bool(svc.external_ip)
            and svc.external_port > 0
        )

    def label(self) -> str:
        svc = self.service
        return f'Use published service: {svc.external_ip}:{svc.external_port}'

    def resolve(self) -> tuple[str, int]:
        return self.service.external_ip, self.service.external_port

    def __str__(self) -> str:
        return self.label()


def vpn_choices(iface: NetworkInterface, vpns: list[Vpn]) -> list[VpnChoice]:
    return [
        VpnChoice(vpn=vpn, iface=iface)
        for vpn in vpns
        if vpn.nat_enabled or vpn.subsumes(iface.network)
    ]


def public_ip_choices(iface: NetworkInterface) -> list[PublicIpChoice]:
    ips = list(iface.public_ips) + list(iface.available_ips)
    return [PublicIpChoice(ip=ip, iface=iface) for ip in ips]


def published_service_choices(
    iface: NetworkInterface,
) -> list[PublishedServiceChoice]:
    return [
        PublishedServiceChoice(service=svc, iface=iface)
        for svc in iface.published_services
    ]


_CRED_PATTERN = re.compile(r'^\s*(?P<user>[^\s/:]+)\s*[/:]\s*(?P<password>\S.*?)\s*$')


@dataclass(frozen=True)
class CredentialCandidate:
    username: str = ''
    password: str = ''

    @classmethod
    def from_text(cls, text: str) -> 'CredentialCandidate':
        """
        Parse the provider's free-text credential notation.

        Entries look like ``root / ChangeMe`` (``root:ChangeMe`` is also
        accepted). Anything else yields an unrecognized candidate.

        Example:
            >>> CredentialCandidate.from_text('alice / p1')
            CredentialCandidate(username='alice', password='p1')
            >>> CredentialCandidate.from_text('call the admin').recognized()
            False
        """
        match = _CRED_PATTERN.match(text or '')
        if match is None:
            return cls()
        return cls(username=match.group('user'), password=match.group('password'))

    def recognized(self) -> bool:
        return bool(self.username) and bool(self.password)

    def label(self) -> str:
        return f'{self.username} via {PROVIDER_NAME}'

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True)
class VM:
    id: str
    name: str = ''
    interfaces: tuple[NetworkInterface, ...] = ()
    credentials: tuple[CredentialCandidate, ...] = ()


@dataclass(frozen=True)
class ResolvedConnection:
    username: str
    password: str
    host: str
    port: int

    def as_properties(self) -> dict[str, object]:
        return {
            'username': self.username,
            'password': self.password,
            'host': self.host,
            'port': self.port,
        }
