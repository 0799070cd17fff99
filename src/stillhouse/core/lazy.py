"""Deferred handles for breaking construction cycles.

A provider that needs a dependency which is itself waiting on that provider
cannot ``await inject()`` it without deadlocking on the cycle check. Instead
it asks for a lazy handle with ``inject_lazy()``. The container fills the
handle once the requesting factory has finished, and from then on
``handle.value`` returns the dependency.

Example:
    >>> async def service_a(injector):
    ...     b = injector.inject_lazy(ServiceB)
    ...     # b.value here would raise LazyNotReadyError
    ...     return ServiceA(get_b=lambda: b.value)
    >>>
    >>> async def service_b(injector):
    ...     return ServiceB(a=await injector.inject(ServiceA))

A handle is written exactly once. Reading it early never blocks; it raises
``LazyNotReadyError``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from .errors import LazyNotReadyError

T = TypeVar("T")


class Lazy(Generic[T]):
    """A single-assignment cell holding a lazily injected value.

    Attributes:
        token: The token the handle was requested for
    """

    __slots__ = ("token", "_value", "_resolved")

    def __init__(self, token: Any):
        self.token = token
        self._value: T | None = None
        self._resolved = False

    @property
    def value(self) -> T:
        """Get the injected value.

        Raises:
            LazyNotReadyError: If the requesting provider has not finished yet
        """
        if not self._resolved:
            raise LazyNotReadyError(self.token)
        return cast(T, self._value)

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def _set(self, value: T) -> None:
        if self._resolved:
            raise RuntimeError(f"Lazy value for {self.token!r} has already been set")
        self._value = value
        self._resolved = True

    def __repr__(self) -> str:
        if self._resolved:
            return f"Lazy[{self.token!r}](resolved={self._value!r})"
        return f"Lazy[{self.token!r}](pending)"
