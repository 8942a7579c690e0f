"""SPARKRUN - simulation core for small arcade runner games."""

__version__ = "0.1.0"
