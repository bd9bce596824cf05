"""Resolve and persist SSH routing and credentials for provisioned VMs."""

__version__ = '0.1.0'
