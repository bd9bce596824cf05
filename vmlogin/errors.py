"""Project-specific exception types."""

from __future__ import annotations


class VMLoginError(RuntimeError):
    """Base error for domain-level vmlogin failures."""


class NoConnectionOptions(VMLoginError):
    """Raised when no valid network path to the machine could be derived."""

    def __init__(self, machine_name: str = ''):
        self.machine_name = machine_name
        target = f" '{machine_name}'" if machine_name else ''
        super().__init__(
            f'Could not find any way to connect to machine{target}. '
            'Attach the VM network to a VPN or enable NAT on an existing VPN.'
        )


class ConfigurationReferenceNotFound(VMLoginError):
    """Raised when an explicitly configured VPN reference matches nothing."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(
            f'Configured VPN reference does not match any usable VPN: {reference}'
        )


class InvalidDefaultIndex(VMLoginError, ValueError):
    def __init__(self, default_index: int, count: int):
        self.default_index = default_index
        self.count = count
        super().__init__(
            f'Bad value for default {default_index!r} (choices={count})'
        )


class MachineNotFoundError(VMLoginError):
    """Raised when the provider has no VM for the machine id."""


class InventoryError(VMLoginError):
    """Raised when the inventory data file is malformed."""
