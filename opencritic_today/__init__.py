"""Command-line checker for games released today, backed by OpenCritic."""

__version__ = "0.1.0"
