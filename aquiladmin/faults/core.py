"""
AquilAdmin faults - base fault type and domains.

Every error raised by the package is a `Fault`: an exception with a stable
code, a message and the domain (subsystem) it belongs to.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    ERROR = "error"     # caller must handle it
    FATAL = "fatal"     # broken setup, nothing to recover


class FaultDomain:
    """
    Subsystem a fault belongs to.

    Subsystems attach their own domain to this class
    (e.g. `FaultDomain.ADMIN`). `severity` is the default for faults of
    the domain.
    """

    def __init__(self, name: str, description: str = "", severity: Severity = Severity.ERROR):
        self.name = name
        self.description = description
        self.severity = severity

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return self.name == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


FaultDomain.CONFIG = FaultDomain("config", "Configuration errors", Severity.FATAL)
FaultDomain.DI = FaultDomain("di", "Service container errors")
FaultDomain.SECURITY = FaultDomain("security", "Security and authorization")


class Fault(Exception):
    """
    Base fault.

    `code`, `message` and `domain` may be given as class attributes
    instead of arguments; a fault missing any of them is a `TypeError`.
    `str(fault)` is `"[CODE] message"`, the bare text is on `message`.
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{self.__class__.__name__} needs a code, a message and a domain")

        super().__init__(self.message)

        self.severity = severity or self.domain.severity
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, domain={self.domain.name}, "
            f"severity={self.severity.value})"
        )
