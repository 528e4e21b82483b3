"""
Template registries and the Jinja2 template functions.
"""

import pytest
from jinja2 import DictLoader, Environment

from aquiladmin.admin.base import BaseAdmin
from aquiladmin.admin.faults import AdminNotFoundFault
from aquiladmin.admin.pool import Pool
from aquiladmin.di.errors import ServiceNotFoundError
from aquiladmin.di.testing import InMemoryLocator
from aquiladmin.templating.extension import TemplateRegistryExtension
from aquiladmin.templating.registry import MutableTemplateRegistry, TemplateRegistry


@pytest.fixture
def post_admin():
    admin = BaseAdmin("app.admin.post", templates={"list": "admin/post/list.html"})
    admin.add_child(BaseAdmin("app.admin.comment", templates={"list": "admin/comment/list.html"}))
    return admin


@pytest.fixture
def extension(post_admin):
    pool = Pool(InMemoryLocator({"app.admin.post": post_admin}))
    pool.admin_service_ids = ["app.admin.post"]
    registry = TemplateRegistry({"layout": "admin/layout.html"})
    return TemplateRegistryExtension(registry, pool)


# ============================================================================
# Registries
# ============================================================================

class TestTemplateRegistry:

    def test_get_template(self):
        registry = TemplateRegistry({"layout": "layout.html"})

        assert registry.get_template("layout") == "layout.html"
        assert registry.get_template("missing") is None

    def test_get_templates_is_a_copy(self):
        registry = TemplateRegistry({"layout": "layout.html"})
        registry.get_templates()["ajax"] = "ajax.html"

        assert registry.has_template("ajax") is False
        assert "layout" in registry
        assert len(registry) == 1

    def test_mutable_registry(self):
        registry = MutableTemplateRegistry()
        registry.set_templates({"layout": "a.html", "ajax": "b.html"})
        registry.set_template("layout", "c.html")

        assert registry.get_templates() == {"layout": "c.html", "ajax": "b.html"}


# ============================================================================
# Template functions
# ============================================================================

class TestTemplateRegistryExtension:

    def test_functions(self, extension):
        assert set(extension.get_functions()) == {
            "get_admin_template",
            "get_global_template",
            "get_admin_pool_template",
        }

    def test_get_admin_template(self, extension):
        assert extension.get_admin_template("list", "app.admin.post") == "admin/post/list.html"
        assert extension.get_admin_template("edit", "app.admin.post") is None

    def test_get_admin_template_for_child(self, extension):
        assert extension.get_admin_template("list", "app.admin.post|app.admin.comment") == "admin/comment/list.html"

    def test_get_admin_template_missing_child(self, extension):
        with pytest.raises(ServiceNotFoundError) as exc_info:
            extension.get_admin_template("list", "app.admin.post|app.admin.tag")

        assert exc_info.value.service_id == "app.admin.post|app.admin.tag"

    def test_get_admin_template_unknown_admin(self, extension):
        with pytest.raises(AdminNotFoundFault):
            extension.get_admin_template("list", "app.admin.pots")

    def test_get_global_template(self, extension):
        assert extension.get_global_template("layout") == "admin/layout.html"
        assert extension.get_global_template("missing") is None

    def test_get_pool_template_is_deprecated_alias(self, extension):
        with pytest.warns(DeprecationWarning):
            assert extension.get_pool_template("layout") == "admin/layout.html"

    def test_register_on_environment(self, extension):
        env = extension.register(Environment(loader=DictLoader({
            "page.html": "{{ get_global_template('layout') }}|{{ get_admin_template('list', 'app.admin.post') }}",
        })))

        assert env.get_template("page.html").render() == "admin/layout.html|admin/post/list.html"
