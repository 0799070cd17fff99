"""Exception hierarchy for registration and resolution failures.

Every failure mode of the registry and the resolver has its own exception
type, carrying the offending token so callers can tell exactly which provider
was at fault.

Exception Hierarchy:
    StillhouseError: Base exception for all Stillhouse errors
    ├── RegistrationError: Invalid ``provide`` / ``import_module`` calls
    │   ├── DuplicateProviderError: Single-kind token registered twice
    │   └── TypeKindConflictError: Token stored as the other kind
    ├── ResolutionError: ``inject`` failures
    │   ├── UnknownProviderError: No definition for a single-kind token
    │   ├── KindMismatchError: Token kind disagrees with its definition
    │   ├── CircularDependencyError: Token already under construction
    │   └── LazyResolutionFailedError: Draining a lazy handle failed
    └── LazyNotReadyError: Lazy handle read before it was filled

Example:
    >>> try:
    ...     logger = await container.inject(Logger)
    ... except UnknownProviderError as e:
    ...     print(f"Nothing provides {e.token!r}")
    >>>
    >>> try:
    ...     module.import_module(other)
    ... except DuplicateProviderError as e:
    ...     print(f"Both modules provide {e.token!r}")

Factory exceptions are never wrapped: whatever a provider factory raises
reaches the caller of ``inject`` unchanged.
"""

from __future__ import annotations

from typing import Any


class StillhouseError(Exception):
    """Base exception for all Stillhouse-related errors."""

    pass


class RegistrationError(StillhouseError):
    """Raised when a provider cannot be registered or a module cannot be imported."""

    def __init__(self, message: str, token: Any = None):
        super().__init__(message)
        self.token = token


class DuplicateProviderError(RegistrationError):
    """Raised when a single-kind token is provided twice without ``override=True``.

    Importing a module never overrides, so a single-kind token present in
    both modules raises this too.
    """

    def __init__(self, token: Any):
        super().__init__(f"Trying to re-provide single-type provider for {token!r}", token=token)


class TypeKindConflictError(RegistrationError):
    """Raised when a token is re-provided as the other kind (single vs group)."""

    def __init__(self, token: Any, stored_group: bool):
        stored = "group-type" if stored_group else "single-type"
        requested = "single-type" if stored_group else "group-type"
        super().__init__(
            f"Trying to re-provide {stored} provider {token!r} as {requested} provider",
            token=token,
        )
        self.stored_group = stored_group


class ResolutionError(StillhouseError):
    """Raised when a token cannot be resolved.

    Attributes:
        token: The token whose resolution failed
        cause: The underlying exception, if any
    """

    def __init__(self, message: str, token: Any = None, cause: Exception | None = None):
        super().__init__(message)
        self.token = token
        self.cause = cause


class UnknownProviderError(ResolutionError):
    """Raised when a single-kind token has no registered definition.

    Group tokens never raise this: an unprovided group resolves to ``[]``.
    """

    def __init__(self, token: Any):
        super().__init__(f"No factory available for the specified token {token!r}", token=token)


class KindMismatchError(ResolutionError):
    """Raised when a token's kind disagrees with the stored definition's kind."""

    def __init__(self, token: Any, requested_group: bool):
        if requested_group:
            message = f"Trying to inject single-type provider {token!r} as group-type provider"
        else:
            message = f"Trying to inject group-type provider {token!r} as single-type provider"
        super().__init__(message, token=token)
        self.requested_group = requested_group


class CircularDependencyError(ResolutionError):
    """Raised when a token is requested while it is still being constructed.

    The ``cycle`` attribute holds the injection path from the first
    occurrence of the token up to the repeated request.
    """

    def __init__(self, token: Any, cycle: list[Any]):
        self.cycle = cycle
        cycle_str = " → ".join(repr(t) for t in [*cycle, token])

        super().__init__(
            f"Circular dependency detected: {cycle_str}. Provider {token!r} is already "
            f"being instantiated; use inject_lazy() to break the cycle",
            token=token,
        )


class LazyResolutionFailedError(ResolutionError):
    """Raised when a lazily requested token fails to resolve during queue draining."""

    def __init__(self, token: Any, cause: Exception):
        super().__init__(
            f"Lazy injection of {token!r} failed: {cause}",
            token=token,
            cause=cause,
        )


class LazyNotReadyError(StillhouseError):
    """Raised when a lazy handle is read before its owning provider finished.

    Lazy values are only readable after the factory that requested them has
    returned, so they must not be read from inside that factory's body.
    """

    def __init__(self, token: Any):
        super().__init__(
            f"Lazy value for {token!r} is not ready yet; read it only after the "
            f"requesting provider has been constructed"
        )
        self.token = token
