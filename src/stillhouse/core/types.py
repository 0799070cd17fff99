"""Type definitions and protocols shared by the registry and the resolver.

Classes:
    Injector: Protocol for the capability handed to every provider factory
    TokenizedProvider: A factory bundled with the token it provides

Aliases:
    ProviderFactory: ``Callable[[Injector], T | Awaitable[T]]``
    ProviderRef: ``ProviderToken[T] | TokenizedProvider[T]``, accepted by
        ``provide``, ``inject`` and ``inject_lazy``
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, Union, runtime_checkable

from .tokens import ProviderToken

if TYPE_CHECKING:
    from .lazy import Lazy
    from .scopes import ProvideScope

T = TypeVar("T")


@runtime_checkable
class Injector(Protocol):
    """What a provider factory receives.

    Containers implement it, and so does every per-resolution injection
    context the container hands to a factory.
    """

    async def inject(self, ref: Any, scope: ProvideScope = ...) -> Any: ...

    def inject_lazy(self, ref: Any, scope: ProvideScope = ...) -> Lazy[Any]: ...


ProviderFactory = Callable[[Injector], Union[T, Awaitable[T]]]


@dataclass(frozen=True)
class TokenizedProvider(Generic[T]):
    """A provider factory with its token attached.

    It can be passed to ``provide`` on its own, since it knows its token, and
    to ``inject`` in place of the token. Calling it calls the wrapped
    factory, so it can also be registered as the factory of another token.
    """

    factory: ProviderFactory[T]
    token: ProviderToken[T]

    def __call__(self, injector: Injector) -> T | Awaitable[T]:
        return self.factory(injector)


ProviderRef = Union[ProviderToken[T], TokenizedProvider[T]]


def normalize_token(ref: ProviderRef[T]) -> ProviderToken[T]:
    """Return the token behind a provider reference."""
    if isinstance(ref, TokenizedProvider):
        return ref.token
    if isinstance(ref, ProviderToken):
        return ref
    raise TypeError(f"Expected a ProviderToken or TokenizedProvider, got {type(ref).__name__}")
