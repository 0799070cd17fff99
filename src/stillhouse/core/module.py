"""Provider definitions and the module registry.

A module maps provider tokens to provider definitions. It is the registration
half of the system; ``Container`` extends it with resolution.

Classes:
    SingleProviderDefinition: One factory for a single-kind token
    GroupProviderDefinition: Ordered factories for a group-kind token
    Module: Registry of token → definition with ``provide``/``import_module``

Key Rules:
    - A single-kind token is provided at most once per module, unless
      ``override=True`` is passed (meant for test doubles)
    - Group-kind tokens accumulate factories in registration order
    - A token keeps its kind: providing or importing it as the other kind
      raises ``TypeKindConflictError``
    - Importing never overrides; colliding single-kind tokens raise
      ``DuplicateProviderError``

Example:
    >>> Config = create_token(name="config")
    >>> Plugins = create_group_token("plugins")
    >>>
    >>> core = (
    ...     create_module("core")
    ...     .provide(Config, lambda injector: {"debug": True})
    ...     .provide(Plugins, lambda injector: "auth")
    ... )
    >>> extras = create_module("extras").provide(Plugins, lambda injector: "metrics")
    >>> core.import_module(extras)  # Plugins now resolves to ["auth", "metrics"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar, Union

from .errors import DuplicateProviderError, RegistrationError, TypeKindConflictError
from .tokens import ProviderToken
from .types import ProviderFactory, ProviderRef, TokenizedProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound="Module")


@dataclass(frozen=True)
class SingleProviderDefinition:
    """Definition of a single-kind provider."""

    is_group: ClassVar[bool] = False

    factory: ProviderFactory[Any]


@dataclass
class GroupProviderDefinition:
    """Definition of a group-kind provider; factories run in list order."""

    is_group: ClassVar[bool] = True

    factories: list[ProviderFactory[Any]] = field(default_factory=list)


ProviderDefinition = Union[SingleProviderDefinition, GroupProviderDefinition]


class Module:
    """Registry of provider definitions.

    Attributes:
        name: Optional debug name for the module
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self._definitions: dict[ProviderToken[Any], ProviderDefinition] = {}

    def provide(
        self: M,
        ref: ProviderRef[T],
        factory: ProviderFactory[T] | None = None,
        *,
        override: bool = False,
    ) -> M:
        """Register a factory under a token.

        Args:
            ref: The token, or a tokenized provider carrying its own token
            factory: The factory; optional when ``ref`` is a tokenized provider,
                in which case it replaces the provider's own factory
            override: Replace an existing single-kind registration instead of
                raising ``DuplicateProviderError``

        Returns:
            This module, for chaining

        Examples:
            >>> module.provide(Logger, make_logger)
            >>> module.provide(logger_provider)
            >>> module.provide(Logger, fake_logger, override=True)
        """
        if isinstance(ref, TokenizedProvider):
            token = ref.token
            if factory is None:
                factory = ref.factory
        elif isinstance(ref, ProviderToken):
            token = ref
            if factory is None:
                raise RegistrationError(f"No factory given for {token!r}", token=token)
        else:
            raise TypeError(
                f"Expected a ProviderToken or TokenizedProvider, got {type(ref).__name__}"
            )

        if token.is_group:
            self._provide_group(token, factory)
        else:
            self._provide_single(token, factory, override)

        return self

    def import_module(self: M, module: Module) -> M:
        """Merge another module's providers into this one.

        Tokens missing here are copied, group tokens present on both sides
        are concatenated (ours first), and everything else conflicts.

        Raises:
            TypeKindConflictError: A token is single-kind on one side and
                group-kind on the other
            DuplicateProviderError: A single-kind token is provided by both
        """
        for token, imported in module._definitions.items():
            own = self._definitions.get(token)

            if own is None:
                if isinstance(imported, GroupProviderDefinition):
                    imported = GroupProviderDefinition(list(imported.factories))
                self._definitions[token] = imported
                continue

            if own.is_group != imported.is_group:
                raise TypeKindConflictError(token, stored_group=own.is_group)

            if isinstance(own, GroupProviderDefinition):
                own.factories.extend(imported.factories)
                continue

            raise DuplicateProviderError(token)

        logger.debug(
            "Imported %d provider(s) from module %r into %r",
            len(module._definitions),
            module.name,
            self.name,
        )
        return self

    def _provide_group(self, token: ProviderToken[Any], factory: ProviderFactory[Any]) -> None:
        existing = self._definitions.get(token)

        if existing is None:
            self._definitions[token] = GroupProviderDefinition([factory])
        elif isinstance(existing, GroupProviderDefinition):
            existing.factories.append(factory)
        else:
            raise TypeKindConflictError(token, stored_group=False)

        logger.debug("Provided group member for %r", token)

    def _provide_single(
        self, token: ProviderToken[Any], factory: ProviderFactory[Any], override: bool
    ) -> None:
        existing = self._definitions.get(token)

        if existing is not None:
            if existing.is_group:
                raise TypeKindConflictError(token, stored_group=True)
            if not override:
                raise DuplicateProviderError(token)
            logger.debug("Overriding provider for %r", token)

        self._definitions[token] = SingleProviderDefinition(factory)
        logger.debug("Provided %r", token)

    # Introspection

    @property
    def definitions(self) -> Mapping[ProviderToken[Any], ProviderDefinition]:
        """Read-only view of the registry."""
        return MappingProxyType(self._definitions)

    def get_definition(self, ref: ProviderRef[Any]) -> ProviderDefinition | None:
        if isinstance(ref, TokenizedProvider):
            ref = ref.token
        return self._definitions.get(ref)

    def has(self, ref: ProviderRef[Any]) -> bool:
        """Check if a token has a definition in this module."""
        return self.get_definition(ref) is not None

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (ProviderToken, TokenizedProvider)):
            return False
        return self.has(ref)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[ProviderToken[Any]]:
        return iter(self._definitions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, providers={len(self._definitions)})"


def create_module(name: str | None = None) -> Module:
    """Create an empty module."""
    return Module(name)
