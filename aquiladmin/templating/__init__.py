"""
AquilAdmin templating - template registries and Jinja2 functions.

Example:
    from jinja2 import Environment
    from aquiladmin.templating import MutableTemplateRegistry, TemplateRegistryExtension

    registry = MutableTemplateRegistry({"layout": "admin/layout.html"})
    env = TemplateRegistryExtension(registry, pool).register(Environment())
"""

from .registry import MutableTemplateRegistry, TemplateRegistry
from .extension import TemplateRegistryExtension

__all__ = [
    "MutableTemplateRegistry",
    "TemplateRegistry",
    "TemplateRegistryExtension",
]
