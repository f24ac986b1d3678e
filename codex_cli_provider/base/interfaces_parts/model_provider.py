"""ModelProvider Protocol (single-class module).

Small capability interface the host registry composes providers through.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ModelProvider(Protocol):
    """Capability interface: name, auth validation, client construction."""

    @property
    def name(self) -> str:
        """Display name of the provider."""
        ...

    def validate_auth(self, params: Optional[Mapping[str, Any]] = None) -> None:
        """Raise when the host-supplied credentials are unusable."""
        ...

    def get_client(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Return a callable client that builds language models by id."""
        ...
