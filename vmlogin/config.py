"""Configuration dataclasses and TOML load/save for vmlogin."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .util import emit_toml_kv, expand

DEFAULT_CONFIG_NAME = '.vmlogin.toml'


@dataclass
class SSHConfig:
    # Passwords are never read from configuration; they live only in the
    # persisted machine properties.
    username: str = ''
    host: str = ''
    port: int = 0


@dataclass
class ProviderConfig:
    vpn_url: str = ''
    region: str = ''
    inventory: str = ''


@dataclass
class PathsConfig:
    data_dir: str = ''


@dataclass
class LoginConfig:
    ssh: SSHConfig = field(default_factory=SSHConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    verbosity: int = 1

    def expanded_paths(self) -> 'LoginConfig':
        self.paths.data_dir = (
            expand(self.paths.data_dir) if self.paths.data_dir else ''
        )
        self.provider.inventory = (
            expand(self.provider.inventory) if self.provider.inventory else ''
        )
        return self


_SECTIONS = ('ssh', 'provider', 'paths')


def dump_toml(cfg: LoginConfig) -> str:
    d = asdict(cfg)
    lines: list[str] = []
    # Top-level keys must precede the first table header.
    if cfg.verbosity != 1:
        lines.append(f'verbosity = {cfg.verbosity}')
        lines.append('')
    for section in _SECTIONS:
        lines.append(f'[{section}]')
        for k, v in d[section].items():
            emit_toml_kv(lines, k, v)
        lines.append('')
    return '\n'.join(lines).rstrip() + '\n'


def load(path: Path) -> LoginConfig:
    raw = tomllib.loads(path.read_text(encoding='utf-8'))
    cfg = LoginConfig()
    for section in _SECTIONS:
        if section in raw and isinstance(raw[section], dict):
            obj = getattr(cfg, section)
            for k, v in raw[section].items():
                if hasattr(obj, k):
                    setattr(obj, k, v)
    if 'verbosity' in raw:
        cfg.verbosity = int(raw['verbosity'])
    cfg.ssh.port = int(cfg.ssh.port or 0)
    return cfg


def save(path: Path, cfg: LoginConfig) -> None:
    path.write_text(dump_toml(cfg), encoding='utf-8')
