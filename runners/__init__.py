"""Hash-gated release automation for resource packages."""

__version__ = "0.1.0"
