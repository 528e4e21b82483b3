"""
Security handlers - pluggable authorization checks on admins and the
objects they manage.

Handlers:
- NoopSecurityHandler: grants everything (development, trusted back-offices)
- RoleSecurityHandler: role-based checks ("ROLE_APP_ADMIN_POST_EDIT")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from aquiladmin.faults.core import Fault, FaultDomain

logger = logging.getLogger("aquiladmin.security")

Attributes = Union[str, Iterable[str]]

# checker(roles, obj) -> True when the current user holds any of `roles`
RoleChecker = Callable[[List[str], Any], bool]


class CredentialsNotFoundFault(Fault):
    """No authenticated identity is available to check roles against."""

    def __init__(self, reason: str = "No credentials available"):
        super().__init__(
            code="AUTHN_CREDENTIALS_NOT_FOUND",
            message=reason,
            domain=FaultDomain.SECURITY,
        )


def _as_list(attributes: Attributes) -> List[str]:
    if isinstance(attributes, str):
        return [attributes]
    return list(attributes)


class SecurityHandler(ABC):
    """Base class for admin security handlers."""

    @abstractmethod
    def is_granted(self, admin: Any, attributes: Attributes, obj: Any = None) -> bool:
        """
        Check if the current user is granted `attributes` on the admin.

        Args:
            admin: Admin the check is made for
            attributes: One attribute ("EDIT") or several
            obj: Optional managed object the check applies to
        """

    @abstractmethod
    def get_base_role(self, admin: Any) -> str:
        """Role template for the admin, with `%s` for the attribute."""

    @abstractmethod
    def build_security_information(self, admin: Any) -> Dict[str, List[str]]:
        """Role -> granted attributes map for the admin."""

    @abstractmethod
    def create_object_security(self, admin: Any, obj: Any) -> None:
        """Hook called after an object is created."""

    @abstractmethod
    def delete_object_security(self, admin: Any, obj: Any) -> None:
        """Hook called before an object is deleted."""


class NoopSecurityHandler(SecurityHandler):
    """Grants every attribute on every admin."""

    def is_granted(self, admin: Any, attributes: Attributes, obj: Any = None) -> bool:
        return True

    def get_base_role(self, admin: Any) -> str:
        return ""

    def build_security_information(self, admin: Any) -> Dict[str, List[str]]:
        return {}

    def create_object_security(self, admin: Any, obj: Any) -> None:
        return None

    def delete_object_security(self, admin: Any, obj: Any) -> None:
        return None


class RoleSecurityHandler(SecurityHandler):
    """
    Role-based handler.

    An attribute `EDIT` on admin `app.admin.post` maps to the role
    `ROLE_APP_ADMIN_POST_EDIT`. Access is granted when the user holds a
    super-admin role, the mapped role for any requested attribute, or the
    admin's `_ALL` role.

    Args:
        checker: Callable `(roles, obj) -> bool`, True when the current
            user holds any of the roles
        super_admin_roles: Roles that bypass every admin check
    """

    def __init__(
        self,
        checker: RoleChecker,
        super_admin_roles: Optional[Sequence[str]] = None,
    ):
        self.checker = checker
        self.super_admin_roles = list(super_admin_roles or ["ROLE_SUPER_ADMIN"])

    def is_granted(self, admin: Any, attributes: Attributes, obj: Any = None) -> bool:
        base_role = self.get_base_role(admin)
        roles = [base_role % attribute for attribute in _as_list(attributes)]
        all_role = base_role % "ALL"

        try:
            return (
                self.checker(self.super_admin_roles, None)
                or self.checker(roles, obj)
                or self.checker([all_role], obj)
            )
        except CredentialsNotFoundFault:
            logger.debug("No credentials while checking %s on %s", roles, admin.code)
            return False

    def get_base_role(self, admin: Any) -> str:
        return "ROLE_" + admin.code.upper().replace(".", "_") + "_%s"

    def build_security_information(self, admin: Any) -> Dict[str, List[str]]:
        return {}

    def create_object_security(self, admin: Any, obj: Any) -> None:
        return None

    def delete_object_security(self, admin: Any, obj: Any) -> None:
        return None


def static_role_checker(granted_roles: Iterable[str]) -> RoleChecker:
    """Checker for a fixed set of roles, e.g. the current identity's."""
    granted = frozenset(granted_roles)

    def check(roles: List[str], obj: Any = None) -> bool:
        return any(role in granted for role in roles)

    return check
