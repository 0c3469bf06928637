"""Yield and volume dashboard for perpetual DEX vaults."""

__version__ = "0.1.0"
