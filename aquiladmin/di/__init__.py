"""
AquilAdmin service container.

Small synchronous container behind the `ServiceLocator` contract the
admin pool consumes:
- String or type tokens
- Singleton caching and transient services
- Cycle detection with the full resolution path
- In-memory locator fake for tests
"""

from .core import (
    Container,
    Provider,
    ProviderMeta,
    ResolveCtx,
    ServiceLocator,
    token_to_key,
)

from .providers import (
    AliasProvider,
    FactoryProvider,
    ValueProvider,
)

from .errors import (
    DIError,
    DuplicateServiceError,
    ServiceCircularReferenceError,
    ServiceNotFoundError,
)

from .testing import InMemoryLocator

__all__ = [
    "Container",
    "Provider",
    "ProviderMeta",
    "ResolveCtx",
    "ServiceLocator",
    "token_to_key",
    "AliasProvider",
    "FactoryProvider",
    "ValueProvider",
    "DIError",
    "DuplicateServiceError",
    "ServiceCircularReferenceError",
    "ServiceNotFoundError",
    "InMemoryLocator",
]
