"""
Template registries - name -> template path lookups.

A registry answers "which template renders `list` for this admin?"
without knowing anything about rendering. One global registry serves
layout-level templates; each admin may carry its own.
"""

from typing import Dict, Mapping, Optional


class TemplateRegistry:
    """
    Read-only template registry.

    Args:
        templates: Mapping of template name -> template path
    """

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self._templates: Dict[str, str] = dict(templates or {})

    def get_templates(self) -> Dict[str, str]:
        """Return a copy of every registered template."""
        return dict(self._templates)

    def get_template(self, name: str) -> Optional[str]:
        """Return the template path for `name`, or None if unknown."""
        return self._templates.get(name)

    def has_template(self, name: str) -> bool:
        return name in self._templates

    def __contains__(self, name: str) -> bool:
        return self.has_template(name)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self._templates)!r})"


class MutableTemplateRegistry(TemplateRegistry):
    """Template registry that can be changed during startup wiring."""

    def set_templates(self, templates: Mapping[str, str]) -> None:
        """Replace every template."""
        self._templates = dict(templates)

    def set_template(self, name: str, template: str) -> None:
        self._templates[name] = template
