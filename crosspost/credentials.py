"""Credential sources consulted by destination adapters.

Adapters receive a source at construction; tests pass a
MappingCredentialSource instead of touching the process environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialSource(Protocol):
    def get(self, name: str) -> str | None:
        """Return the value for a credential variable, or None if unset."""
        ...


class MappingCredentialSource:
    """Credentials held in a fixed name -> value mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)


class EnvCredentialSource:
    """Credentials read from the process environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)


def is_present(source: CredentialSource, name: str) -> bool:
    value = source.get(name)
    return isinstance(value, str) and bool(value.strip())
