"""
AquilAdmin - admin registry, template lookup and security handlers for
Aquilia-style back offices.

Example:
    from aquiladmin import AdminConfig, BaseAdmin, Container, PoolBuilder

    container = Container()
    builder = PoolBuilder(container)
    builder.admin("app.admin.post", lambda: BaseAdmin("app.admin.post", Post), group="content")
    pool = builder.build(AdminConfig(title="Back office"))

    pool.get_instance("app.admin.post")
"""

__version__ = "0.1.0"

from .admin import (
    AdminConfigurationFault,
    AdminDefinition,
    AdminGroupNotFoundFault,
    AdminInterface,
    AdminNotFoundFault,
    BaseAdmin,
    Pool,
    PoolBuilder,
)
from .config import AdminConfig, AdminConfigLoader
from .di import Container, InMemoryLocator, ServiceLocator
from .faults import Fault, FaultDomain, Severity
from .security import NoopSecurityHandler, RoleSecurityHandler, SecurityHandler
from .templating import MutableTemplateRegistry, TemplateRegistry, TemplateRegistryExtension

__all__ = [
    "AdminConfigurationFault",
    "AdminDefinition",
    "AdminGroupNotFoundFault",
    "AdminInterface",
    "AdminNotFoundFault",
    "BaseAdmin",
    "Pool",
    "PoolBuilder",
    "AdminConfig",
    "AdminConfigLoader",
    "Container",
    "InMemoryLocator",
    "ServiceLocator",
    "Fault",
    "FaultDomain",
    "Severity",
    "NoopSecurityHandler",
    "RoleSecurityHandler",
    "SecurityHandler",
    "MutableTemplateRegistry",
    "TemplateRegistry",
    "TemplateRegistryExtension",
]
