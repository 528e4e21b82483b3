"""
Testing utilities for the container.
"""

from typing import Any, Callable, Dict, List, Optional, Union

from .errors import ServiceNotFoundError


class InMemoryLocator:
    """
    In-memory fake implementing the `ServiceLocator` contract.

    Backed either by a dict of ready-made services or by a callable
    `service_id -> service`. Every `get` is recorded in `calls`.

    Example:
        locator = InMemoryLocator({"app.admin.post": post_admin})
        pool = Pool(locator)
    """

    def __init__(
        self,
        services: Optional[Union[Dict[str, Any], Callable[[str], Any]]] = None,
    ):
        if callable(services):
            self._services: Dict[str, Any] = {}
            self._factory: Optional[Callable[[str], Any]] = services
        else:
            self._services = dict(services or {})
            self._factory = None
        self.calls: List[str] = []

    def set(self, service_id: str, service: Any) -> None:
        self._services[service_id] = service

    def get(self, service_id: str) -> Any:
        self.calls.append(service_id)
        if service_id in self._services:
            return self._services[service_id]
        if self._factory is not None:
            return self._factory(service_id)
        raise ServiceNotFoundError(service_id)

    def has(self, service_id: str) -> bool:
        return self._factory is not None or service_id in self._services

    def reset(self) -> None:
        """Reset call tracking."""
        self.calls.clear()
