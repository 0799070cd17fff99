"""Resolving container built on top of the module registry.

The container turns provider definitions into values. Each factory
invocation receives an ``InjectionContext``: a lightweight injector that
shares the container's registry and instance caches but carries its own
snapshot of the injection stack and its own lazy queue.

Resolution of ``inject(token, scope)``:
    1. Unwrap a tokenized provider to its token
    2. Reject the token if it is already on the injection stack
    3. Serve singleton requests from the cache when possible
    4. Run the factory (or, for group tokens, every factory in order) with a
       child context whose stack is extended by the token
    5. Memoize singleton results, then drain the child's lazy queue

Example:
    >>> A = create_token(name="a")
    >>> B = create_token(name="b")
    >>>
    >>> async def make_b(injector):
    ...     return await injector.inject(A) + "y"
    >>>
    >>> container = create_container().provide(A, lambda injector: "x").provide(B, make_b)
    >>> await container.inject(B)
    'xy'

Lazy Queue Draining:
    Lazy requests are resolved on the requesting context's parent path, with
    the finished token already popped off the stack. A request for a token
    that is still being constructed on that path (including the requesting
    factory's own token) is not resolved again. It is handed to the
    resolution constructing that token and filled with the value that
    resolution produces. For a group token that value is the complete list,
    so every member of the group shares one deferred list.

Concurrency:
    All resolution runs on one event loop. The singleton cache is read and
    written without locking, so two unawaited concurrent resolutions of the
    same uncached token may both run its factory; the later result wins the
    cache. Group factories always run one after another.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from .errors import (
    CircularDependencyError,
    KindMismatchError,
    LazyResolutionFailedError,
    UnknownProviderError,
)
from .lazy import Lazy
from .module import GroupProviderDefinition, Module
from .scopes import ProvideScope
from .tokens import GroupProviderToken, ProviderToken, SingleProviderToken
from .types import ProviderFactory, ProviderRef, TokenizedProvider, normalize_token

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _LazyRequest:
    token: ProviderToken[Any]
    scope: ProvideScope
    handle: Lazy[Any]


class InjectionContext:
    """Injector handed to a provider factory for one resolution.

    Attributes:
        container: The container owning the registry and caches
        parent: The context that requested this resolution (``None`` at the root)
        stack: Tokens under construction on this resolution path, outermost first
    """

    __slots__ = ("container", "parent", "stack", "_lazy_queue", "_deferred")

    def __init__(
        self,
        container: Container,
        stack: tuple[ProviderToken[Any], ...] = (),
        parent: InjectionContext | None = None,
        deferred: list[_LazyRequest] | None = None,
    ):
        self.container = container
        self.parent = parent
        self.stack = stack
        self._lazy_queue: list[_LazyRequest] = []
        # Requests for stack[-1], filled with its value once constructed
        self._deferred: list[_LazyRequest] = deferred if deferred is not None else []

    def child(
        self, token: ProviderToken[Any], deferred: list[_LazyRequest] | None = None
    ) -> InjectionContext:
        """Create the context for constructing ``token`` on this path.

        Group members pass one shared ``deferred`` list, since requests for
        the group can only be filled once every member has been built.
        """
        return InjectionContext(self.container, (*self.stack, token), self, deferred)

    @overload
    async def inject(self, ref: SingleProviderToken[T], scope: ProvideScope = ...) -> T: ...

    @overload
    async def inject(self, ref: GroupProviderToken[T], scope: ProvideScope = ...) -> list[T]: ...

    @overload
    async def inject(self, ref: TokenizedProvider[T], scope: ProvideScope = ...) -> T: ...

    async def inject(self, ref: ProviderRef[Any], scope: ProvideScope = ProvideScope.SINGLETON) -> Any:
        """Resolve a token on this context's injection path."""
        return await self.container._inject(normalize_token(ref), scope, self)

    def inject_lazy(
        self, ref: ProviderRef[T], scope: ProvideScope = ProvideScope.SINGLETON
    ) -> Lazy[T]:
        """Request a token without resolving it yet.

        The returned handle is filled after the factory that owns this
        context has finished; reading it earlier raises ``LazyNotReadyError``.
        """
        token = normalize_token(ref)
        handle: Lazy[T] = Lazy(token)
        self._lazy_queue.append(_LazyRequest(token, scope, handle))
        logger.debug("Queued lazy injection of %r", token)
        return handle

    @property
    def pending_lazy(self) -> int:
        """Number of lazy requests waiting to be drained."""
        return len(self._lazy_queue)

    def __repr__(self) -> str:
        path = " → ".join(repr(t) for t in self.stack) or "<root>"
        return f"InjectionContext({path})"


class Container(Module):
    """A module that can resolve its providers.

    Singleton values are cached for the lifetime of the container and shared
    by every injection context derived from it.
    """

    def __init__(self, name: str | None = None):
        super().__init__(name)
        self._single_instances: dict[ProviderToken[Any], Any] = {}
        self._group_instances: dict[ProviderToken[Any], list[Any]] = {}
        self._root_context = InjectionContext(self)

    @overload
    async def inject(self, ref: SingleProviderToken[T], scope: ProvideScope = ...) -> T: ...

    @overload
    async def inject(self, ref: GroupProviderToken[T], scope: ProvideScope = ...) -> list[T]: ...

    @overload
    async def inject(self, ref: TokenizedProvider[T], scope: ProvideScope = ...) -> T: ...

    async def inject(self, ref: ProviderRef[Any], scope: ProvideScope = ProvideScope.SINGLETON) -> Any:
        """Resolve a token to its value (single) or list of values (group).

        Args:
            ref: Token or tokenized provider to resolve
            scope: ``SINGLETON`` (default) memoizes, ``TRANSIENT`` always
                runs the factory and leaves the cache alone

        Raises:
            UnknownProviderError: Single-kind token with no definition
            KindMismatchError: Token kind disagrees with its definition
            CircularDependencyError: Token requested while being constructed
            LazyResolutionFailedError: A lazy request made by a factory failed
        """
        return await self._root_context.inject(ref, scope)

    def inject_lazy(
        self, ref: ProviderRef[T], scope: ProvideScope = ProvideScope.SINGLETON
    ) -> Lazy[T]:
        """Request a token lazily at the top level.

        Top-level handles have no owning factory; they are filled by
        ``drain_lazy()``.
        """
        return self._root_context.inject_lazy(ref, scope)

    async def drain_lazy(self) -> None:
        """Resolve every pending top-level lazy request."""
        await self._drain_lazy_queue(self._root_context, self._root_context)

    def is_cached(self, ref: ProviderRef[Any]) -> bool:
        """Check whether a singleton value is memoized for a token."""
        token = normalize_token(ref)
        return token in self._single_instances or token in self._group_instances

    # Resolution

    async def _inject(
        self, token: ProviderToken[Any], scope: ProvideScope, requester: InjectionContext
    ) -> Any:
        if token in requester.stack:
            cycle = list(requester.stack[requester.stack.index(token):])
            raise CircularDependencyError(token, cycle)

        if token.is_group:
            return await self._resolve_group(token, scope, requester)
        return await self._resolve_single(token, scope, requester)

    async def _resolve_single(
        self, token: ProviderToken[Any], scope: ProvideScope, requester: InjectionContext
    ) -> Any:
        if scope is ProvideScope.SINGLETON and token in self._single_instances:
            logger.debug("Singleton cache hit for %r", token)
            return self._single_instances[token]

        definition = self._definitions.get(token)

        if definition is None:
            raise UnknownProviderError(token)

        if isinstance(definition, GroupProviderDefinition):
            raise KindMismatchError(token, requested_group=False)

        context = requester.child(token)
        value = await self._invoke(definition.factory, context)

        if scope is ProvideScope.SINGLETON:
            self._single_instances[token] = value

        try:
            await self._drain_lazy_queue(context, requester)
        except LazyResolutionFailedError:
            if scope is ProvideScope.SINGLETON and self._single_instances.get(token) is value:
                del self._single_instances[token]
            raise

        self._fill_deferred(context._deferred, value)
        return value

    async def _resolve_group(
        self, token: ProviderToken[Any], scope: ProvideScope, requester: InjectionContext
    ) -> list[Any]:
        if scope is ProvideScope.SINGLETON and token in self._group_instances:
            logger.debug("Group cache hit for %r", token)
            return self._group_instances[token]

        definition = self._definitions.get(token)

        if definition is None:
            return []

        if not isinstance(definition, GroupProviderDefinition):
            raise KindMismatchError(token, requested_group=True)

        result = []
        deferred: list[_LazyRequest] = []
        for factory in definition.factories:
            context = requester.child(token, deferred)
            value = await self._invoke(factory, context)
            await self._drain_lazy_queue(context, requester)
            result.append(value)

        if scope is ProvideScope.SINGLETON:
            self._group_instances[token] = result

        self._fill_deferred(deferred, result)
        return result

    async def _invoke(self, factory: ProviderFactory[Any], context: InjectionContext) -> Any:
        logger.debug("Constructing %r", context.stack[-1])
        value = factory(context)
        if inspect.isawaitable(value):
            value = await value
        return value

    async def _drain_lazy_queue(
        self, context: InjectionContext, requester: InjectionContext
    ) -> None:
        while context._lazy_queue:
            request = context._lazy_queue.pop(0)

            if request.token in context.stack:
                # Still under construction; its owner fills the handle.
                owner = context
                while owner.stack[-1] is not request.token:
                    owner = owner.parent
                owner._deferred.append(request)
                logger.debug("Deferred lazy injection of %r to its own construction", request.token)
                continue

            try:
                value = await self._inject(request.token, request.scope, requester)
            except Exception as e:
                logger.warning("Lazy injection of %r failed: %s", request.token, e)
                raise LazyResolutionFailedError(request.token, e) from e

            request.handle._set(value)
            logger.debug("Filled lazy handle for %r", request.token)

    def _fill_deferred(self, deferred: list[_LazyRequest], value: Any) -> None:
        for request in deferred:
            request.handle._set(value)
            logger.debug("Filled deferred lazy handle for %r", request.token)
        deferred.clear()

    def __repr__(self) -> str:
        return (
            f"Container(name={self.name!r}, providers={len(self._definitions)}, "
            f"singletons={len(self._single_instances) + len(self._group_instances)})"
        )


def create_container(name: str | None = None) -> Container:
    """Create an empty container."""
    return Container(name)
