"""Structure values produced by stub generation and response parsing."""
from __future__ import annotations

from typing import Any


class Structure(dict):
    """A mapping of member name to value that also allows attribute access.

    Members are stored in the order the shape declares them.
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def to_dict(self) -> dict:
        return {key: _plain(value) for key, value in self.items()}


class EmptyStructure(Structure):
    """Result of an operation that declares no output."""

    def __repr__(self) -> str:
        return "EmptyStructure()"


def _plain(value: Any) -> Any:
    if isinstance(value, Structure):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
