"""Provider tokens: the opaque keys under which providers are registered.

A token is identified by object identity only. Two tokens created with the
same debug name are still distinct, so a token has to be shared between the
code that provides a value and the code that injects it.

Tokens come in two kinds, fixed at creation:
    SingleProviderToken: resolves to exactly one value
    GroupProviderToken: resolves to an ordered list of values contributed by
        every factory registered under it

Example:
    >>> Logger = create_token(name="logger")
    >>> Plugins = create_group_token("plugins")
    >>> Logger.is_group, Plugins.is_group
    (False, True)
"""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class ProviderToken(Generic[T]):
    """Base class for provider tokens.

    Equality and hashing are inherited from ``object``, so every token is
    unique. The type parameter only documents the value type for static
    checkers.
    """

    __slots__ = ("_is_group", "_name")

    def __init__(self, name: str | None = None, *, is_group: bool = False):
        self._name = name
        self._is_group = is_group

    @property
    def name(self) -> str | None:
        """Debug name, used in diagnostics only."""
        return self._name

    @property
    def is_group(self) -> bool:
        return self._is_group

    def __repr__(self) -> str:
        kind = "GroupProviderToken" if self._is_group else "ProviderToken"
        return f"{kind}({self._name or ''})"


class SingleProviderToken(ProviderToken[T]):
    """Token for a provider that produces exactly one value."""

    __slots__ = ()

    def __init__(self, name: str | None = None):
        super().__init__(name, is_group=False)


class GroupProviderToken(ProviderToken[T]):
    """Token for a multi-binding: many factories, one ordered list of values."""

    __slots__ = ()

    def __init__(self, name: str | None = None):
        super().__init__(name, is_group=True)
