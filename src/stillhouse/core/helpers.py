"""Helpers for creating tokens and defining providers.

Functions:
    create_token: Create a single-kind token
    create_group_token: Create a group-kind token
    define_provider_factory: Identity helper that types a factory
    define_static_provider_factory: Factory that always returns one value
    attach_provider_token: Bundle a factory with an existing token
    define_provider: Bundle a factory with a new (or given) token; usable as
        a decorator
    define_static_provider: ``define_provider`` for a constant value

Example:
    >>> @define_provider
    ... def logger(injector):
    ...     return logging.getLogger("app")
    >>>
    >>> @define_provider(name="fetcher")
    ... async def fetcher(injector):
    ...     return Fetcher(await injector.inject(logger))
    >>>
    >>> container = create_container().provide(logger).provide(fetcher)
    >>> await container.inject(fetcher)
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, overload

from .tokens import GroupProviderToken, ProviderToken, SingleProviderToken
from .types import ProviderFactory, TokenizedProvider

T = TypeVar("T")


def create_token(
    factory: ProviderFactory[T] | None = None, name: str | None = None
) -> SingleProviderToken[T]:
    """Create a new single-kind token.

    ``factory`` is accepted so the value type can be inferred from it by a
    type checker; it is not registered anywhere.
    """
    return SingleProviderToken(name)


def create_group_token(name: str | None = None) -> GroupProviderToken[Any]:
    """Create a new group-kind token."""
    return GroupProviderToken(name)


def define_provider_factory(factory: ProviderFactory[T]) -> ProviderFactory[T]:
    return factory


def define_static_provider_factory(value: T) -> ProviderFactory[T]:
    """Create a factory that returns ``value`` itself on every call."""

    def static_factory(injector: Any) -> T:
        return value

    return static_factory


def attach_provider_token(
    factory: ProviderFactory[T], token: ProviderToken[T]
) -> TokenizedProvider[T]:
    return TokenizedProvider(factory, token)


@overload
def define_provider(
    factory: ProviderFactory[T], token: ProviderToken[T] | str | None = None
) -> TokenizedProvider[T]: ...


@overload
def define_provider(
    factory: None = None, token: ProviderToken[T] | str | None = None, *, name: str | None = None
) -> Callable[[ProviderFactory[T]], TokenizedProvider[T]]: ...


def define_provider(
    factory: ProviderFactory[T] | None = None,
    token: ProviderToken[T] | str | None = None,
    *,
    name: str | None = None,
):
    """Attach a token to a factory, creating the token unless one is given.

    ``token`` may be an existing token or a debug name for the new token. The
    name falls back to the factory's ``__name__``.

    Can be used directly or as a decorator, with or without arguments:

        >>> logger = define_provider(make_logger)
        >>> logger = define_provider(make_logger, "logger")
        >>> logger = define_provider(make_logger, Logger)
        >>>
        >>> @define_provider
        ... def logger(injector): ...
        >>>
        >>> @define_provider(name="logger")
        ... def make_logger(injector): ...
    """
    if isinstance(token, str):
        name, token = token, None

    def decorator(func: ProviderFactory[T]) -> TokenizedProvider[T]:
        if isinstance(token, ProviderToken):
            return attach_provider_token(func, token)
        debug_name = name or getattr(func, "__name__", None)
        return attach_provider_token(func, create_token(func, debug_name))

    if factory is None:
        return decorator
    return decorator(factory)


def define_static_provider(
    value: T, token: ProviderToken[T] | str | None = None
) -> TokenizedProvider[T]:
    """Define a provider for a constant value."""
    if isinstance(token, ProviderToken):
        return attach_provider_token(define_static_provider_factory(value), token)
    return attach_provider_token(define_static_provider_factory(value), create_token(name=token))
