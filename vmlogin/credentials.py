"""Choose the SSH username and password used to log into a machine."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from .models import VM
from .prompt import ConsoleUI, ask, ask_from_list

log = logger

MANUAL_ENTRY_LABEL = 'Type credentials manually'
CLEARTEXT_NOTE = (
    'Note that the machine password will be stored in cleartext on your '
    'local filesystem.'
)


def resolve_credentials(
    ui: ConsoleUI,
    vm: VM,
    *,
    username: Optional[str] = None,
    password: Optional[str] = None,
    machine_name: str = '',
) -> tuple[str, str]:
    log.debug('resolve_credentials machine={}', machine_name or vm.id)
    if username and password:
        return username, password

    ui.info(CLEARTEXT_NOTE)
    creds = [c for c in vm.credentials if c.recognized()]

    if username:
        ui.info(f'SSH username found in configuration: {username}')
        match = next((c for c in creds if c.username == username), None)
        if match is not None:
            log.info('Using matching password from VM credentials for {}', username)
            ui.info('Matched SSH password in VM credentials.')
            password = match.password
        else:
            log.info('No VM credentials for {}; using manual password entry', username)
    elif creds:
        question = (
            f"How do you want to choose SSH credentials for machine "
            f"'{machine_name or vm.name}'?"
        )
        choices = [c.label() for c in creds] + [MANUAL_ENTRY_LABEL]
        index = ask_from_list(ui, question, choices, 0)
        if index < len(creds):
            username = creds[index].username
            password = creds[index].password
    else:
        log.info('No login credentials found for the VM; prompting for manual entry')

    # Blank manual entries are accepted as-is.
    if not username:
        username = ask(ui, 'Enter SSH username:')
    if not password:
        password = ask(ui, 'Enter SSH password (no output will appear):', echo=False)
    return username, password
