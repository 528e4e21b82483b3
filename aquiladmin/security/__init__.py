"""
AquilAdmin security handlers.
"""

from .handler import (
    CredentialsNotFoundFault,
    NoopSecurityHandler,
    RoleChecker,
    RoleSecurityHandler,
    SecurityHandler,
    static_role_checker,
)

__all__ = [
    "CredentialsNotFoundFault",
    "NoopSecurityHandler",
    "RoleChecker",
    "RoleSecurityHandler",
    "SecurityHandler",
    "static_role_checker",
]
