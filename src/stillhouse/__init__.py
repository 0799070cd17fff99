"""Stillhouse - explicit, async dependency injection for Python.

Providers are plain factories registered under tokens. A container builds
values on demand, memoizes singletons, collects multi-bindings, detects
circular dependencies and offers lazy injection for the cycles you mean.

Key Features:
    - Identity-keyed tokens, no reflection or constructor scanning
    - Sync and async factories alike
    - Singleton and transient scopes
    - Group tokens for ordered multi-binding
    - Composable modules with ``import_module``
    - Lazy handles for legitimate construction cycles

Quick Start:
    >>> from stillhouse import create_container, define_provider, define_static_provider
    >>>
    >>> greeting = define_static_provider("hello", "greeting")
    >>>
    >>> @define_provider
    ... async def message(injector):
    ...     return await injector.inject(greeting) + ", world"
    >>>
    >>> container = create_container().provide(greeting).provide(message)
    >>> await container.inject(message)
    'hello, world'
"""

__version__ = "0.1.0"

from stillhouse.core.container import Container, create_container
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
from stillhouse.core.module import Module, create_module
from stillhouse.core.scopes import ProvideScope
from stillhouse.core.tokens import GroupProviderToken, ProviderToken, SingleProviderToken
from stillhouse.core.types import Injector, ProviderFactory, TokenizedProvider

__all__ = [
    # Core DI
    "Container",
    "Module",
    "create_container",
    "create_module",
    "ProvideScope",
    # Tokens
    "ProviderToken",
    "SingleProviderToken",
    "GroupProviderToken",
    "TokenizedProvider",
    "create_token",
    "create_group_token",
    # Providers
    "Injector",
    "ProviderFactory",
    "define_provider",
    "define_static_provider",
    "define_provider_factory",
    "define_static_provider_factory",
    "attach_provider_token",
    # Lazy
    "Lazy",
    # Errors
    "StillhouseError",
    "RegistrationError",
    "DuplicateProviderError",
    "TypeKindConflictError",
    "ResolutionError",
    "UnknownProviderError",
    "KindMismatchError",
    "CircularDependencyError",
    "LazyResolutionFailedError",
    "LazyNotReadyError",
]
