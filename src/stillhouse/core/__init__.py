"""Core components of the Stillhouse dependency injection runtime.

Key Components:
    Module: Registry of provider definitions with ``provide``/``import_module``
    Container: Module plus resolution, singleton caching and cycle detection
    Tokens: Identity-keyed handles, single-kind or group-kind
    Lazy: Deferred handle for breaking construction cycles
    Helpers: ``define_provider`` and friends for bundling factories with tokens

Usage Example:
    >>> from stillhouse.core import create_container, define_provider
    >>>
    >>> @define_provider
    ... def settings(injector):
    ...     return {"url": "https://example.com"}
    >>>
    >>> @define_provider
    ... async def client(injector):
    ...     return Client(await injector.inject(settings))
    >>>
    >>> container = create_container().provide(settings).provide(client)
    >>> api = await container.inject(client)
"""

from stillhouse.core.container import Container, InjectionContext, create_container
from stillhouse.core.errors import (
    CircularDependencyError,
    DuplicateProviderError,
    KindMismatchError,
    LazyNotReadyError,
    LazyResolutionFailedError,
    RegistrationError,
    ResolutionError,
    StillhouseError,
    TypeKindConflictError,
    UnknownProviderError,
)
from stillhouse.core.helpers import (
    attach_provider_token,
    create_group_token,
    create_token,
    define_provider,
    define_provider_factory,
    define_static_provider,
    define_static_provider_factory,
)
from stillhouse.core.lazy import Lazy
from stillhouse.core.module import (
    GroupProviderDefinition,
    Module,
    ProviderDefinition,
    SingleProviderDefinition,
    create_module,
)
from stillhouse.core.scopes import ProvideScope
from stillhouse.core.tokens import GroupProviderToken, ProviderToken, SingleProviderToken
from stillhouse.core.types import Injector, ProviderFactory, ProviderRef, TokenizedProvider

__all__ = [
    # Errors
    "CircularDependencyError",
    # Container
    "Container",
    "DuplicateProviderError",
    "GroupProviderDefinition",
    "GroupProviderToken",
    "InjectionContext",
    # Types
    "Injector",
    "KindMismatchError",
    # Lazy
    "Lazy",
    "LazyNotReadyError",
    "LazyResolutionFailedError",
    # Registry
    "Module",
    # Scopes
    "ProvideScope",
    "ProviderDefinition",
    "ProviderFactory",
    "ProviderRef",
    # Tokens
    "ProviderToken",
    "RegistrationError",
    "ResolutionError",
    "SingleProviderDefinition",
    "SingleProviderToken",
    "StillhouseError",
    "TokenizedProvider",
    "TypeKindConflictError",
    "UnknownProviderError",
    # Helpers
    "attach_provider_token",
    "create_container",
    "create_group_token",
    "create_module",
    "create_token",
    "define_provider",
    "define_provider_factory",
    "define_static_provider",
    "define_static_provider_factory",
]
