"""
Jinja2 integration - template lookup functions for admin templates.

Registers three globals on a Jinja2 environment:

    {% extends get_global_template('layout') %}
    {% include get_admin_template('list', admin.code) %}
    {{ get_admin_pool_template('layout') }}   {# deprecated alias #}
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Callable, Dict, Optional

from jinja2 import Environment

from aquiladmin.di.errors import ServiceNotFoundError

from .registry import TemplateRegistry

if TYPE_CHECKING:
    from aquiladmin.admin.base import AdminInterface
    from aquiladmin.admin.pool import Pool


logger = logging.getLogger("aquiladmin.templating")


class TemplateRegistryExtension:
    """
    Template functions backed by the global registry and the admin pool.

    Args:
        global_template_registry: Registry for templates not bound to an admin
        pool: Admin pool used to resolve admin codes
    """

    def __init__(self, global_template_registry: TemplateRegistry, pool: "Pool"):
        self.global_template_registry = global_template_registry
        self.pool = pool

    def get_functions(self) -> Dict[str, Callable]:
        return {
            "get_admin_template": self.get_admin_template,
            "get_global_template": self.get_global_template,
            # Compatibility alias, to be removed
            "get_admin_pool_template": self.get_pool_template,
        }

    def register(self, env: Environment) -> Environment:
        """Install the functions as globals on `env`."""
        env.globals.update(self.get_functions())
        logger.debug("Registered admin template functions on %r", env)
        return env

    def get_admin_template(self, name: str, admin_code: str) -> Optional[str]:
        """
        Template `name` of the admin identified by `admin_code`.

        Raises:
            AdminNotFoundFault: If the first code segment is unknown
            ServiceNotFoundError: If a child segment does not resolve
        """
        return self._get_admin(admin_code).get_template(name)

    def get_global_template(self, name: str) -> Optional[str]:
        return self.global_template_registry.get_template(name)

    def get_pool_template(self, name: str) -> Optional[str]:
        """Deprecated alias of `get_global_template`."""
        warnings.warn(
            "get_admin_pool_template() is deprecated, use get_global_template() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.get_global_template(name)

    def _get_admin(self, admin_code: str) -> "AdminInterface":
        admin = self.pool.get_admin_by_admin_code(admin_code)
        if admin is False or admin is None:
            raise ServiceNotFoundError(admin_code)
        return admin
