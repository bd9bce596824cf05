"""CLI package exports for top-level command entry points."""

from __future__ import annotations

from .main import VMLoginModalCLI, main

__all__ = ['VMLoginModalCLI', 'main']
