"""
Admin pool faults.

Typed faults raised by the admin pool. All three are programmer or
configuration errors: they are raised to the caller and never retried.
"""

from __future__ import annotations

from typing import Any, Optional

from aquiladmin.faults.core import Fault, FaultDomain, Severity


# Register admin fault domain
FaultDomain.ADMIN = FaultDomain("admin", "Admin pool faults")


class AdminFault(Fault):
    """Base class for all admin pool faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ADMIN,
            severity=severity,
            metadata=metadata,
        )


class AdminNotFoundFault(AdminFault):
    """
    Unknown admin service id or unresolvable admin code segment.

    `message` is passed through verbatim so suggestion text built by the
    pool reaches the caller unchanged.
    """

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        *,
        closest: Optional[str] = None,
        alternatives: Optional[list[str]] = None,
    ):
        super().__init__(
            code="ADMIN_NOT_FOUND",
            message=message or f'Admin service "{code}" not found in admin pool.',
            metadata={
                "admin_code": code,
                "closest": closest,
                "alternatives": list(alternatives or []),
            },
        )
        self.admin_code = code
        self.closest = closest
        self.alternatives = list(alternatives or [])


class AdminGroupNotFoundFault(AdminFault):
    """Unknown admin group name."""

    def __init__(self, group: str):
        super().__init__(
            code="ADMIN_GROUP_NOT_FOUND",
            message=f'Group "{group}" not found in admin pool.',
            metadata={"group": group},
        )
        self.group = group


class AdminConfigurationFault(AdminFault):
    """Malformed, stale or ambiguous class -> admin mapping."""

    def __init__(self, message: str, *, admin_class: Optional[str] = None, **metadata: Any):
        super().__init__(
            code="ADMIN_CONFIGURATION_INVALID",
            message=message,
            severity=Severity.FATAL,
            metadata={"admin_class": admin_class, **metadata},
        )
        self.admin_class = admin_class


# Short names used by callers that think in terms of the error kinds
NotFoundError = AdminNotFoundFault
ArgumentError = AdminGroupNotFoundFault
ConfigurationError = AdminConfigurationFault
