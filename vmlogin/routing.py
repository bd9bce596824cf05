"""Choose the network path (host and port) used to reach a machine."""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from .errors import ConfigurationReferenceNotFound, NoConnectionOptions
from .models import VM, NetworkInterface, PathCandidate, Vpn, vpn_choices
from .prompt import ConsoleUI, ask_from_list

log = logger


def connection_choices(
    iface: NetworkInterface, vpns: list[Vpn]
) -> list[PathCandidate]:
    return list(vpn_choices(iface, vpns))


def resolve_routing(
    ui: ConsoleUI,
    vm: VM,
    list_vpns: Callable[[], list[Vpn]],
    *,
    host: Optional[str] = None,
    port: Optional[int] = None,
    vpn_url: Optional[str] = None,
    machine_name: str = '',
) -> tuple[str, int]:
    """
    Resolve the (host, port) pair for ``vm``.

    Only the VM's first network interface is considered. ``list_vpns`` is
    called at most once, and not at all when host and port are both known.
    """
    log.debug('resolve_routing machine={}', machine_name or vm.id)
    if host and port:
        return host, port

    if not vm.interfaces:
        raise NoConnectionOptions(machine_name or vm.name)
    iface = vm.interfaces[0]
    choices = [c for c in connection_choices(iface, list_vpns()) if c.valid()]
    if not choices:
        raise NoConnectionOptions(machine_name or vm.name)

    if vpn_url:
        match = next(
            (c for c in choices if c.vpn is not None and c.vpn.id in vpn_url),
            None,
        )
        if match is None:
            raise ConfigurationReferenceNotFound(vpn_url)
        log.info('Using configured VPN {} for routing', match.vpn.id)
        return match.resolve()

    if len(choices) == 1:
        log.info('Only one connection option; using {}', choices[0].label())
        return choices[0].resolve()

    question = f"How do you want to connect to machine '{machine_name or vm.name}'?"
    index = ask_from_list(ui, question, [c.label() for c in choices], 0)
    return choices[index].resolve()
