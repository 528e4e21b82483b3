"""
Admin objects.

An admin manages display and CRUD policy for one entity class. The pool
only relies on the `AdminInterface` capabilities; `BaseAdmin` is the
stock implementation applications subclass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable

from aquiladmin.templating.registry import MutableTemplateRegistry

from .faults import AdminNotFoundFault

if TYPE_CHECKING:
    from aquiladmin.security.handler import SecurityHandler


CONTEXT_DASHBOARD = "dashboard"
CONTEXT_MENU = "menu"


@runtime_checkable
class AdminInterface(Protocol):
    """Capabilities the pool and template functions rely on."""

    code: str

    def show_in(self, context: str) -> bool:
        ...

    def has_child(self, code: str) -> bool:
        ...

    def get_child(self, code: str) -> "AdminInterface":
        ...

    def get_template(self, name: str) -> Optional[str]:
        ...


def class_key(managed_class: Union[type, str, None]) -> Optional[str]:
    """Normalize a managed class to its `module.QualName` string."""
    if managed_class is None or isinstance(managed_class, str):
        return managed_class
    return f"{managed_class.__module__}.{managed_class.__qualname__}"


class BaseAdmin:
    """
    Stock admin implementation.

    Args:
        code: Admin service id (e.g. "app.admin.post")
        managed_class: Entity class (or its dotted name) this admin manages
        label: Display label (defaults to the code)
        templates: Per-admin template name -> path mapping
        security_handler: Handler deciding `is_granted` (defaults to no-op)
        show_in_dashboard: Whether the admin appears on the dashboard
    """

    CONTEXT_DASHBOARD = CONTEXT_DASHBOARD
    CONTEXT_MENU = CONTEXT_MENU

    def __init__(
        self,
        code: str,
        managed_class: Union[type, str, None] = None,
        *,
        label: Optional[str] = None,
        templates: Optional[Dict[str, str]] = None,
        security_handler: Optional["SecurityHandler"] = None,
        show_in_dashboard: bool = True,
    ):
        if security_handler is None:
            from aquiladmin.security.handler import NoopSecurityHandler
            security_handler = NoopSecurityHandler()

        self.code = code
        self.managed_class = class_key(managed_class)
        self.label = label or code
        self.template_registry = MutableTemplateRegistry(templates)
        self.security_handler = security_handler
        self.show_in_dashboard = show_in_dashboard
        self.parent: Optional[BaseAdmin] = None
        self._children: Dict[str, BaseAdmin] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r})"

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def show_in(self, context: str) -> bool:
        """Whether this admin is listed in the given display context."""
        if context == CONTEXT_DASHBOARD:
            return self.show_in_dashboard and self.is_granted("LIST")
        if context == CONTEXT_MENU:
            return self.is_granted("LIST")
        return True

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def add_child(self, child: "BaseAdmin") -> None:
        child.parent = self
        self._children[child.code] = child

    def has_child(self, code: str) -> bool:
        return code in self._children

    def get_child(self, code: str) -> "BaseAdmin":
        if code not in self._children:
            raise AdminNotFoundFault(
                code,
                f'Admin "{self.code}" has no child admin "{code}".',
            )
        return self._children[code]

    def get_children(self) -> List["BaseAdmin"]:
        return list(self._children.values())

    def is_child(self) -> bool:
        return self.parent is not None

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def get_template(self, name: str) -> Optional[str]:
        return self.template_registry.get_template(name)

    def set_template(self, name: str, template: str) -> None:
        self.template_registry.set_template(name, template)

    # ------------------------------------------------------------------
    # Security
    # ------------------------------------------------------------------

    def is_granted(self, attributes: Union[str, Iterable[str]], obj: Any = None) -> bool:
        return self.security_handler.is_granted(self, attributes, obj)

    def get_security_information(self) -> Dict[str, List[str]]:
        return self.security_handler.build_security_information(self)
