"""
AquilAdmin admin registry.

- Pool: lazily-resolved registry of admin services
- BaseAdmin: stock admin implementation
- PoolBuilder: startup wiring from admin definitions
"""

from .base import (
    CONTEXT_DASHBOARD,
    CONTEXT_MENU,
    AdminInterface,
    BaseAdmin,
    class_key,
)

from .faults import (
    AdminConfigurationFault,
    AdminFault,
    AdminGroupNotFoundFault,
    AdminNotFoundFault,
    ArgumentError,
    ConfigurationError,
    NotFoundError,
)

from .pool import Pool, levenshtein

from .wiring import (
    GLOBAL_TEMPLATE_REGISTRY_ID,
    POOL_ID,
    SECURITY_HANDLER_ID,
    AdminDefinition,
    PoolBuilder,
)

__all__ = [
    "CONTEXT_DASHBOARD",
    "CONTEXT_MENU",
    "AdminInterface",
    "BaseAdmin",
    "class_key",
    "AdminConfigurationFault",
    "AdminFault",
    "AdminGroupNotFoundFault",
    "AdminNotFoundFault",
    "ArgumentError",
    "ConfigurationError",
    "NotFoundError",
    "Pool",
    "levenshtein",
    "GLOBAL_TEMPLATE_REGISTRY_ID",
    "POOL_ID",
    "SECURITY_HANDLER_ID",
    "AdminDefinition",
    "PoolBuilder",
]
