"""Tests for config load/save."""

from __future__ import annotations

from pathlib import Path

from vmlogin.config import LoginConfig, dump_toml, load, save


def test_dump_load_roundtrip(tmp_path: Path) -> None:
    cfg = LoginConfig()
    cfg.ssh.username = 'root'
    cfg.ssh.host = 'vm.example.com'
    cfg.ssh.port = 2222
    cfg.provider.vpn_url = 'https://cloud.example.com/vpns/"v1"'
    cfg.provider.region = 'US-West'
    cfg.verbosity = 2
    fpath = tmp_path / '.vmlogin.toml'
    save(fpath, cfg)

    cfg2 = load(fpath)
    assert cfg2.ssh.username == 'root'
    assert cfg2.ssh.host == 'vm.example.com'
    assert cfg2.ssh.port == 2222
    assert cfg2.provider.vpn_url == cfg.provider.vpn_url
    assert cfg2.provider.region == 'US-West'
    assert cfg2.verbosity == 2


def test_dump_toml_verbosity_default_omitted() -> None:
    assert 'verbosity =' not in dump_toml(LoginConfig())


def test_password_key_is_ignored(tmp_path: Path) -> None:
    fpath = tmp_path / 'cfg.toml'
    fpath.write_text('[ssh]\nusername = "u"\npassword = "nope"\n', encoding='utf-8')
    cfg = load(fpath)
    assert cfg.ssh.username == 'u'
    assert not hasattr(cfg.ssh, 'password')


def test_expanded_paths_expands_env(monkeypatch) -> None:
    monkeypatch.setenv('VMLOGIN_TEST_DIR', '/tmp/vmlogin-x')
    cfg = LoginConfig()
    cfg.paths.data_dir = '$VMLOGIN_TEST_DIR/data'
    cfg.provider.inventory = '$VMLOGIN_TEST_DIR/inv.toml'
    out = cfg.expanded_paths()
    assert out.paths.data_dir == '/tmp/vmlogin-x/data'
    assert out.provider.inventory == '/tmp/vmlogin-x/inv.toml'


def test_verbosity_written_before_sections() -> None:
    cfg = LoginConfig()
    cfg.verbosity = 0
    text = dump_toml(cfg)
    assert text.startswith('verbosity = 0\n')
    assert text.index('verbosity') < text.index('[ssh]')
