"""
Container error types with rich diagnostics.
"""

from typing import List, Optional


class DIError(Exception):
    """Base exception for container errors."""
    pass


class ServiceNotFoundError(DIError):
    """No service registered for the requested id."""

    def __init__(
        self,
        service_id: str,
        candidates: Optional[List[str]] = None,
        requested_by: Optional[str] = None,
    ):
        self.service_id = service_id
        self.candidates = candidates or []
        self.requested_by = requested_by

        # Build helpful error message
        msg = f"No service found for id={service_id}"

        if requested_by:
            msg += f"\nRequested by: {requested_by}"

        if self.candidates:
            msg += "\n\nCandidates found:"
            for candidate in self.candidates:
                msg += f"\n  - {candidate}"

        super().__init__(msg)


class ServiceCircularReferenceError(DIError):
    """Circular reference detected while resolving a service."""

    def __init__(self, service_id: str, path: List[str]):
        self.service_id = service_id
        self.path = path

        msg = f"Circular reference detected for service {service_id}:"
        for i, token in enumerate(path):
            arrow = " -> " if i < len(path) - 1 else ""
            msg += f"\n  {token}{arrow}"

        msg += "\n\nSuggested fixes:"
        msg += "\n  - Resolve the dependency lazily inside the service instead of in its factory"
        msg += "\n  - Restructure dependencies to remove cycle"

        super().__init__(msg)


class DuplicateServiceError(DIError):
    """A different provider is already registered under the same id."""

    def __init__(self, service_id: str, existing: str):
        self.service_id = service_id
        self.existing = existing
        super().__init__(
            f"Provider for {service_id} already registered: {existing}"
        )
