"""
Core container types and protocols.

Defines the service-locator contract consumed by the admin pool and the
synchronous container that implements it.
"""

import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    List,
    Optional,
    Protocol,
    Type,
    runtime_checkable,
)

from .errors import (
    DuplicateServiceError,
    ServiceCircularReferenceError,
    ServiceNotFoundError,
)

logger = logging.getLogger("aquiladmin.di")

# Module-level cache: type -> "module.qualname" string
_type_key_cache: Dict[type, str] = {}

# Scopes that cache instances
_CACHEABLE_SCOPES = frozenset(("singleton", "app"))


def token_to_key(token: Type | str) -> str:
    """Convert a type or string token to its string service id."""
    if isinstance(token, str):
        return token

    if isinstance(token, type):
        key = _type_key_cache.get(token)
        if key is None:
            key = f"{token.__module__}.{token.__qualname__}"
            _type_key_cache[token] = key
        return key

    return str(token)


@runtime_checkable
class ServiceLocator(Protocol):
    """
    Minimal locator contract: look a service up by id.

    `get` raises `ServiceNotFoundError` for unknown ids and
    `ServiceCircularReferenceError` when resolution loops.
    """

    def get(self, service_id: str) -> Any:
        ...

    def has(self, service_id: str) -> bool:
        ...


@dataclass(frozen=True, slots=True)
class ProviderMeta:
    """Compact provider metadata."""
    name: str
    token: str
    scope: str  # "singleton", "app", "transient"
    tags: tuple[str, ...] = field(default_factory=tuple)
    module: str = ""
    qualname: str = ""


class ResolveCtx:
    """
    Context for one top-level resolution.

    Tracks the resolution stack for cycle detection and exposes
    `get`/`has` so providers resolve their own dependencies through it.
    """
    __slots__ = ("container", "stack")

    def __init__(self, container: "Container"):
        self.container = container
        self.stack: List[str] = []

    def push(self, token: str) -> None:
        self.stack.append(token)

    def pop(self) -> None:
        self.stack.pop()

    def in_cycle(self, token: str) -> bool:
        """Check if token is currently being resolved (cycle)."""
        return token in self.stack

    def get_trace(self) -> List[str]:
        """Get current resolution trace for error messages."""
        return self.stack.copy()

    def get(self, service_id: Type | str) -> Any:
        return self.container._resolve(token_to_key(service_id), self)

    def has(self, service_id: Type | str) -> bool:
        return self.container.has(service_id)


@runtime_checkable
class Provider(Protocol):
    """
    Provider protocol - how to instantiate a service.
    """

    @property
    def meta(self) -> ProviderMeta:
        ...

    def instantiate(self, ctx: ResolveCtx) -> Any:
        ...


class Container:
    """
    Service container - maps service ids to providers and caches
    singleton instances.

    Implements `ServiceLocator`, which is all the admin pool needs.
    """

    __slots__ = ("_providers", "_cache", "_scope", "_parent")

    def __init__(self, scope: str = "app", parent: Optional["Container"] = None):
        self._providers: Dict[str, Provider] = {}
        self._cache: Dict[str, Any] = {}
        self._scope = scope
        self._parent = parent

    def register(self, provider: Provider) -> None:
        """
        Register a provider under its token.

        Registering the same provider twice is a no-op; registering a
        different provider under a taken id raises.
        """
        key = provider.meta.token

        if key in self._providers:
            existing = self._providers[key]
            if existing is provider:
                return
            raise DuplicateServiceError(key, existing.meta.name)

        self._providers[key] = provider
        logger.debug("Registered provider %s for %s", provider.meta.name, key)

    def register_instance(self, token: Type | str, instance: Any) -> None:
        """Register a pre-built object as a singleton service."""
        from .providers import ValueProvider

        self.register(ValueProvider(instance, token))

    def get(self, service_id: Type | str) -> Any:
        """
        Resolve a service by id.

        Raises:
            ServiceNotFoundError: If no provider is registered
            ServiceCircularReferenceError: If resolution loops
        """
        key = token_to_key(service_id)

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        return self._resolve(key, ResolveCtx(container=self))

    def has(self, service_id: Type | str) -> bool:
        """Check if a provider is registered for the id."""
        return self._lookup_provider(token_to_key(service_id)) is not None

    def ids(self) -> List[str]:
        """Registered service ids, in registration order."""
        ids = list(self._parent.ids()) if self._parent else []
        ids.extend(key for key in self._providers if key not in ids)
        return ids

    def create_child(self) -> "Container":
        """Create a child container that falls back to this one."""
        return Container(scope="request", parent=self)

    def reset(self) -> None:
        """Drop cached instances."""
        self._cache.clear()

    def _resolve(self, key: str, ctx: ResolveCtx) -> Any:
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        if ctx.in_cycle(key):
            raise ServiceCircularReferenceError(key, ctx.get_trace() + [key])

        provider = self._lookup_provider(key)
        if provider is None:
            self._raise_not_found(key, ctx)

        # Singletons live in the container that owns the provider
        if self._parent and key not in self._providers and provider.meta.scope in _CACHEABLE_SCOPES:
            return self._parent._resolve(key, ctx)

        ctx.push(key)
        try:
            instance = provider.instantiate(ctx)
        finally:
            ctx.pop()

        if provider.meta.scope in _CACHEABLE_SCOPES:
            self._cache[key] = instance

        return instance

    def _lookup_provider(self, key: str) -> Optional[Provider]:
        if key in self._providers:
            return self._providers[key]

        if self._parent:
            return self._parent._lookup_provider(key)

        return None

    def _raise_not_found(self, key: str, ctx: ResolveCtx) -> None:
        """Raise ServiceNotFoundError with similar ids as candidates."""
        candidates = [candidate for candidate in self.ids() if key in candidate]
        trace = ctx.get_trace()

        raise ServiceNotFoundError(
            key,
            candidates=candidates,
            requested_by=trace[-1] if trace else None,
        )
