"""
Admin Pool - registry of admin services.

Maps admin codes (and the classes they manage) to admin services that
are resolved lazily through a service locator, and organizes them in
groups for dashboards and menus.

The pool is built once at startup, then only read. It never constructs
admins itself; every admin comes from the locator.

Example:
    pool = Pool(container, title="Back office", title_logo="/img/logo.png")
    pool.admin_service_ids = ["app.admin.post", "app.admin.comment"]
    pool.admin_classes = {"app.models.Post": ["app.admin.post"]}

    post_admin = pool.get_instance("app.admin.post")
    comments = pool.get_admin_by_admin_code("app.admin.post|app.admin.comment")
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from aquiladmin.di.core import ServiceLocator
from aquiladmin.di.errors import DIError, ServiceCircularReferenceError
from aquiladmin.templating.registry import MutableTemplateRegistry

from .base import CONTEXT_DASHBOARD, AdminInterface, class_key
from .faults import AdminConfigurationFault, AdminGroupNotFoundFault, AdminNotFoundFault

logger = logging.getLogger("aquiladmin.pool")

CODE_SEPARATOR = "|"


def levenshtein(source: str, target: str) -> int:
    """Edit distance with unit insert, delete and substitute costs."""
    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, 1):
        current = [i]
        for j, target_char in enumerate(target, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (source_char != target_char),
            ))
        previous = current

    return previous[-1]


class Pool:
    """
    Registry of admin services.

    Args:
        container: Locator resolving admin service ids to admins
        title: Back-office title
        title_logo: Path to the back-office logo
        options: Free-form options read with `get_option`
    """

    def __init__(
        self,
        container: ServiceLocator,
        title: str = "",
        title_logo: str = "",
        options: Optional[Dict[str, Any]] = None,
    ):
        self._container = container
        self._title = title
        self._title_logo = title_logo
        self._options: Dict[str, Any] = dict(options or {})

        self._admin_service_ids: List[str] = []
        self._admin_classes: Dict[str, Union[str, List[str]]] = {}
        self._admin_groups: Dict[str, Any] = {}
        self._template_registry: Optional[MutableTemplateRegistry] = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def container(self) -> ServiceLocator:
        return self._container

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, title: str) -> None:
        self._title = title

    @property
    def title_logo(self) -> str:
        return self._title_logo

    @title_logo.setter
    def title_logo(self, title_logo: str) -> None:
        self._title_logo = title_logo

    @property
    def options(self) -> Dict[str, Any]:
        return self._options

    @options.setter
    def options(self, options: Dict[str, Any]) -> None:
        self._options = dict(options)

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    @property
    def admin_service_ids(self) -> List[str]:
        return self._admin_service_ids

    @admin_service_ids.setter
    def admin_service_ids(self, admin_service_ids: Sequence[str]) -> None:
        # Duplicates dropped, first occurrence keeps its position
        self._admin_service_ids = list(dict.fromkeys(admin_service_ids))

    @property
    def admin_classes(self) -> Dict[str, Union[str, List[str]]]:
        return self._admin_classes

    @admin_classes.setter
    def admin_classes(self, admin_classes: Mapping[str, Union[str, List[str]]]) -> None:
        self._admin_classes = dict(admin_classes)

    @property
    def admin_groups(self) -> Dict[str, Any]:
        return self._admin_groups

    @admin_groups.setter
    def admin_groups(self, admin_groups: Mapping[str, Any]) -> None:
        self._admin_groups = dict(admin_groups)

    # ------------------------------------------------------------------
    # Lookup by code
    # ------------------------------------------------------------------

    def get_instance(self, code: str) -> AdminInterface:
        """
        Resolve an admin code, following `parent|child` chains.

        Raises:
            AdminNotFoundFault: If the first segment is not a registered
                admin service id, or a child segment does not exist
        """
        parent_code, *child_codes = code.split(CODE_SEPARATOR)
        admin = self._resolve(parent_code)

        for child_code in child_codes:
            if not admin.has_child(child_code):
                raise AdminNotFoundFault(
                    child_code,
                    f'Admin "{parent_code}" has no child admin "{child_code}" '
                    f'(admin code "{code}").',
                )
            admin = admin.get_child(child_code)
            parent_code = child_code

        return admin

    def get_admin_by_admin_code(self, code: str) -> Union[AdminInterface, bool]:
        """
        Resolve an admin code like `get_instance`, returning False when a
        child segment does not exist.

        An unknown first segment still raises `AdminNotFoundFault`.
        """
        admin_code, *child_codes = code.split(CODE_SEPARATOR)
        admin = self._resolve(admin_code)

        for child_code in child_codes:
            if not admin.has_child(child_code):
                logger.debug("Admin %s has no child %s", admin_code, child_code)
                return False
            admin = admin.get_child(child_code)

        return admin

    def _resolve(self, admin_code: str) -> AdminInterface:
        if admin_code not in self._admin_service_ids:
            raise self._not_found(admin_code)

        try:
            admin = self._container.get(admin_code)
        except ServiceCircularReferenceError as exc:
            raise AdminNotFoundFault(
                admin_code,
                f'Admin service "{admin_code}" could not be resolved: {exc}',
            ) from exc
        except (DIError, LookupError) as exc:
            raise self._not_found(admin_code) from exc

        logger.debug("Resolved admin %s", admin_code)
        return admin

    def _not_found(self, admin_code: str) -> AdminNotFoundFault:
        """Build the not-found fault with "did you mean" suggestions."""
        message = f'Admin service "{admin_code}" not found in admin pool.'
        known = [
            admin_service_id
            for admin_service_id in self._admin_service_ids
            if admin_service_id != admin_code
        ]

        if not known:
            logger.warning("Unknown admin service %s", admin_code)
            return AdminNotFoundFault(admin_code, message)

        distances = {
            admin_service_id: levenshtein(admin_code, admin_service_id)
            for admin_service_id in known
        }

        # Ties go to the id registered last
        closest = known[0]
        for admin_service_id in known:
            if distances[admin_service_id] <= distances[closest]:
                closest = admin_service_id

        alternatives = sorted(
            (admin_service_id for admin_service_id in known if admin_service_id != closest),
            key=distances.__getitem__,
        )

        logger.warning("Unknown admin service %s, closest is %s", admin_code, closest)
        return AdminNotFoundFault(
            admin_code,
            f'{message} Did you mean "{closest}" '
            f'or one of those: [{", ".join(alternatives)}]?',
            closest=closest,
            alternatives=alternatives,
        )

    # ------------------------------------------------------------------
    # Lookup by managed class
    # ------------------------------------------------------------------

    def has_admin_by_class(self, managed_class: Union[type, str]) -> bool:
        return class_key(managed_class) in self._admin_classes

    def get_admin_by_class(self, managed_class: Union[type, str]) -> Optional[AdminInterface]:
        """
        Resolve the single admin managing `managed_class`.

        Returns None when no admin manages the class.

        Raises:
            AdminConfigurationFault: If the mapping is malformed, names
                unregistered admin service ids, or names several admins
        """
        key = class_key(managed_class)
        if key not in self._admin_classes:
            return None

        value = self._admin_classes[key]
        if isinstance(value, str):
            admin_service_ids = [value]
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            admin_service_ids = list(value)
        else:
            raise AdminConfigurationFault(
                f'Invalid format for the admin class map entry of "{key}": '
                f'expected an admin service id or a list of them, got {type(value).__name__}.',
                admin_class=key,
            )

        if not admin_service_ids:
            return None

        if len(admin_service_ids) > 1:
            raise AdminConfigurationFault(
                f'Unable to find a valid admin for the class: {key}, '
                f'there are too many registered: {", ".join(admin_service_ids)}',
                admin_class=key,
                admin_service_ids=admin_service_ids,
            )

        unknown = [
            admin_service_id
            for admin_service_id in admin_service_ids
            if admin_service_id not in self._admin_service_ids
        ]
        if unknown:
            raise AdminConfigurationFault(
                f'Admin class map entry of "{key}" references admin services '
                f'missing from the pool: {", ".join(unknown)}',
                admin_class=key,
                admin_service_ids=unknown,
            )

        return self.get_instance(admin_service_ids[0])

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def has_group(self, group: str) -> bool:
        return group in self._admin_groups

    def get_groups(self) -> Dict[str, Dict[str, AdminInterface]]:
        """Every group, with each item's admin resolved and keyed by id."""
        groups: Dict[str, Dict[str, AdminInterface]] = {}

        for name, group in self._admin_groups.items():
            groups[name] = {}
            for _, item in self._iter_items(group):
                admin_code = item.get("admin")
                if admin_code:
                    groups[name][admin_code] = self.get_instance(admin_code)

        return groups

    def get_dashboard_groups(self) -> Dict[str, Dict[str, Any]]:
        """
        Groups as shown on the dashboard.

        Admin items are replaced by their resolved admin when it shows in
        the dashboard and dropped otherwise. Items without an admin and groups left without
        items are dropped.
        """
        dashboard_groups: Dict[str, Dict[str, Any]] = {}

        for name, group in self._admin_groups.items():
            if not isinstance(group, Mapping) or not group.get("items"):
                continue

            keyed = isinstance(group["items"], Mapping)
            items: Dict[Any, Any] = {}

            for key, item in self._iter_items(group):
                admin_code = item.get("admin")
                if not admin_code:
                    continue

                admin = self.get_instance(admin_code)
                if admin.show_in(CONTEXT_DASHBOARD):
                    items[key] = admin

            if not items:
                logger.debug("Dropping dashboard group %s: no visible items", name)
                continue

            descriptor = dict(group)
            descriptor["items"] = items if keyed else list(items.values())
            dashboard_groups[name] = descriptor

        return dashboard_groups

    def get_admins_by_group(self, group: str) -> List[str]:
        """
        Admin service ids listed in a group, unresolved.

        Raises:
            AdminGroupNotFoundFault: If the group is unknown
        """
        if group not in self._admin_groups:
            raise AdminGroupNotFoundFault(group)

        return [
            item["admin"]
            for _, item in self._iter_items(self._admin_groups[group])
            if item.get("admin")
        ]

    @staticmethod
    def _iter_items(group: Any) -> Iterator[tuple[Any, Dict[str, Any]]]:
        """Yield (key, item) pairs; bare string items name an admin."""
        if not isinstance(group, Mapping):
            return

        items = group.get("items") or []
        pairs = items.items() if isinstance(items, Mapping) else enumerate(items)

        for key, item in pairs:
            if isinstance(item, str):
                item = {"admin": item}
            if isinstance(item, Mapping):
                yield key, item

    # ------------------------------------------------------------------
    # Legacy template access
    # ------------------------------------------------------------------

    @property
    def template_registry(self) -> Optional[MutableTemplateRegistry]:
        return self._template_registry

    def set_template_registry(self, template_registry: MutableTemplateRegistry) -> None:
        self._template_registry = template_registry

    def get_template(self, name: str) -> Optional[str]:
        """Deprecated: read from the global template registry instead."""
        warnings.warn(
            "Pool.get_template() is deprecated, use the global TemplateRegistry instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._legacy_registry().get_template(name)

    def get_templates(self) -> Dict[str, str]:
        """Deprecated: read from the global template registry instead."""
        warnings.warn(
            "Pool.get_templates() is deprecated, use the global TemplateRegistry instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._legacy_registry().get_templates()

    def set_templates(self, templates: Mapping[str, str]) -> None:
        """Deprecated: configure the global template registry instead."""
        warnings.warn(
            "Pool.set_templates() is deprecated, configure the global TemplateRegistry instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        self._legacy_registry().set_templates(templates)

    def _legacy_registry(self) -> MutableTemplateRegistry:
        if self._template_registry is None:
            self._template_registry = MutableTemplateRegistry()
        return self._template_registry
