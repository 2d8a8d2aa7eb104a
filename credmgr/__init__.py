"""Credmgr — local PIN-protected store for cloud and version-control credentials."""

__version__ = "0.1.0"
