"""
Startup wiring - turns admin definitions into container services and a
configured pool.

Each admin is declared once with its code, factory, managed class and
group. The builder registers one factory per admin in the container and
derives the pool's service ids, class map and groups from the
declarations, in declaration order.

Example:
    builder = PoolBuilder(container)
    builder.add_group("content", label="Content", icon="fa-file")
    builder.add(AdminDefinition(
        code="app.admin.post",
        factory=lambda handler: BaseAdmin("app.admin.post", Post, security_handler=handler),
        managed_class=Post,
        group="content",
        dependencies=(SECURITY_HANDLER_ID,),
    ))
    pool = builder.build(AdminConfig(title="Back office"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from aquiladmin.config import AdminConfig
from aquiladmin.di.core import Container
from aquiladmin.di.providers import FactoryProvider, ValueProvider

from .base import class_key
from .pool import Pool

logger = logging.getLogger("aquiladmin.wiring")

POOL_ID = "aquiladmin.pool"
SECURITY_HANDLER_ID = "aquiladmin.security.handler"
GLOBAL_TEMPLATE_REGISTRY_ID = "aquiladmin.template_registry"


@dataclass
class AdminDefinition:
    """
    Declaration of one admin service.

    `factory` is called with the services named in `dependencies`,
    resolved from the container in order. `show_in_dashboard=False` hides
    the built admin from the dashboard.
    """
    code: str
    factory: Callable[..., Any]
    managed_class: Union[type, str, None] = None
    group: Optional[str] = None
    label: Optional[str] = None
    route: str = "list"
    route_params: Dict[str, Any] = field(default_factory=dict)
    dependencies: Sequence[Union[type, str]] = ()
    show_in_dashboard: bool = True


class PoolBuilder:
    """
    Collects admin definitions and builds a configured `Pool`.

    Args:
        container: Container receiving one factory per admin, plus the
            pool, security handler and global template registry
    """

    def __init__(self, container: Container):
        self.container = container
        self._definitions: Dict[str, AdminDefinition] = {}
        self._groups: Dict[str, Dict[str, Any]] = {}

    def add_group(
        self,
        name: str,
        *,
        label: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> "PoolBuilder":
        group = self._groups.setdefault(name, {"label": name, "icon": None, "items": []})
        if label is not None:
            group["label"] = label
        if icon is not None:
            group["icon"] = icon
        return self

    def add(self, definition: AdminDefinition) -> "PoolBuilder":
        if definition.code in self._definitions:
            raise ValueError(f"Admin '{definition.code}' is already defined")

        self._definitions[definition.code] = definition
        if definition.group:
            self.add_group(definition.group)
            self._groups[definition.group]["items"].append({
                "admin": definition.code,
                "label": definition.label or "",
                "route": definition.route,
                "route_params": dict(definition.route_params),
            })
        return self

    def admin(self, code: str, factory: Callable[..., Any], **kwargs: Any) -> "PoolBuilder":
        """Shorthand for `add(AdminDefinition(code, factory, **kwargs))`."""
        return self.add(AdminDefinition(code=code, factory=factory, **kwargs))

    @property
    def definitions(self) -> List[AdminDefinition]:
        return list(self._definitions.values())

    def build(self, config: Optional[AdminConfig] = None, *, checker: Optional[Callable] = None) -> Pool:
        """
        Register services and return the configured pool.

        Args:
            config: Admin configuration (defaults to `AdminConfig()`)
            checker: Role checker, required by the "role" security handler
        """
        config = config or AdminConfig()

        self._register_once(ValueProvider(config.create_security_handler(checker), SECURITY_HANDLER_ID))
        self._register_once(ValueProvider(config.create_template_registry(), GLOBAL_TEMPLATE_REGISTRY_ID))

        for definition in self._definitions.values():
            self._register_once(FactoryProvider(
                self._admin_factory(definition),
                definition.code,
                dependencies=definition.dependencies,
                name=definition.code,
            ))

        pool = Pool(
            self.container,
            title=config.title,
            title_logo=config.title_logo,
            options=config.options,
        )
        pool.admin_service_ids = list(self._definitions)
        pool.admin_classes = self._build_class_map()
        pool.admin_groups = {
            name: {**group, "items": list(group["items"])}
            for name, group in self._groups.items()
        }
        pool.set_template_registry(self.container.get(GLOBAL_TEMPLATE_REGISTRY_ID))

        self._register_once(ValueProvider(pool, POOL_ID))

        logger.info(
            "Admin pool built with %d admins in %d groups",
            len(self._definitions),
            len(self._groups),
        )
        return pool

    @staticmethod
    def _admin_factory(definition: AdminDefinition) -> Callable[..., Any]:
        if definition.show_in_dashboard:
            return definition.factory

        def factory(*dependencies: Any) -> Any:
            admin = definition.factory(*dependencies)
            admin.show_in_dashboard = False
            return admin

        return factory

    def _build_class_map(self) -> Dict[str, List[str]]:
        classes: Dict[str, List[str]] = {}
        for definition in self._definitions.values():
            key = class_key(definition.managed_class)
            if key is not None:
                classes.setdefault(key, []).append(definition.code)
        return classes

    def _register_once(self, provider: Any) -> None:
        if self.container.has(provider.meta.token):
            logger.debug("Keeping existing service %s", provider.meta.token)
            return
        self.container.register(provider)
