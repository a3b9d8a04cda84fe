"""Authoritative UDP DNS server answering from YAML zone files with per-region records."""

__version__ = "0.1.0"