"""Core engine for stubflow (shapes, stub generation, protocols)."""

from . import config, errors

__all__ = ["config", "errors"]
