"""Resolution scopes."""

from __future__ import annotations

from enum import Enum


class ProvideScope(Enum):
    """How long a resolved value is kept by the container."""

    SINGLETON = "singleton"  # Memoized for the container's lifetime
    TRANSIENT = "transient"  # Factory runs on every request
