"""
Security handlers: no-op and role-based.
"""

import pytest

from aquiladmin.admin.base import BaseAdmin
from aquiladmin.security.handler import (
    CredentialsNotFoundFault,
    NoopSecurityHandler,
    RoleSecurityHandler,
    SecurityHandler,
    static_role_checker,
)


@pytest.fixture
def admin():
    return BaseAdmin("app.admin.post")


# ============================================================================
# NoopSecurityHandler
# ============================================================================

class TestNoopSecurityHandler:

    @pytest.fixture
    def handler(self):
        return NoopSecurityHandler()

    def test_is_security_handler(self, handler):
        assert isinstance(handler, SecurityHandler)

    def test_is_granted(self, handler, admin):
        assert handler.is_granted(admin, ["TOTO"]) is True
        assert handler.is_granted(admin, "TOTO") is True

    def test_build_security_information(self, handler, admin):
        assert handler.build_security_information(admin) == {}

    def test_create_object_security(self, handler, admin):
        assert handler.create_object_security(admin, object()) is None

    def test_delete_object_security(self, handler, admin):
        assert handler.delete_object_security(admin, object()) is None

    def test_get_base_role(self, handler, admin):
        assert handler.get_base_role(admin) == ""


# ============================================================================
# RoleSecurityHandler
# ============================================================================

class TestRoleSecurityHandler:

    def test_get_base_role(self, admin):
        handler = RoleSecurityHandler(static_role_checker([]))

        assert handler.get_base_role(admin) == "ROLE_APP_ADMIN_POST_%s"

    def test_granted_for_matching_role(self, admin):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_APP_ADMIN_POST_EDIT"]))

        assert handler.is_granted(admin, "EDIT") is True
        assert handler.is_granted(admin, ["LIST", "EDIT"]) is True
        assert handler.is_granted(admin, "DELETE") is False

    def test_granted_for_all_role(self, admin):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_APP_ADMIN_POST_ALL"]))

        assert handler.is_granted(admin, "DELETE") is True
        assert handler.is_granted(admin, ["LIST", "EXPORT"]) is True

    def test_all_role_of_another_admin_is_not_granted(self, admin):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_APP_ADMIN_TAG_ALL"]))

        assert handler.is_granted(admin, "LIST") is False

    def test_granted_for_super_admin(self, admin):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_SUPER_ADMIN"]))

        assert handler.is_granted(admin, "DELETE") is True

    def test_custom_super_admin_roles(self, admin):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_ROOT"]), ["ROLE_ROOT"])

        assert handler.is_granted(admin, "DELETE") is True

    def test_checker_receives_object(self, admin):
        seen = []

        def checker(roles, obj):
            seen.append((roles, obj))
            return False

        post = object()
        RoleSecurityHandler(checker).is_granted(admin, "EDIT", post)

        assert seen == [
            (["ROLE_SUPER_ADMIN"], None),
            (["ROLE_APP_ADMIN_POST_EDIT"], post),
            (["ROLE_APP_ADMIN_POST_ALL"], post),
        ]

    def test_missing_credentials_denies(self, admin):
        def checker(roles, obj):
            raise CredentialsNotFoundFault()

        assert RoleSecurityHandler(checker).is_granted(admin, "EDIT") is False

    def test_build_security_information(self, admin):
        assert RoleSecurityHandler(static_role_checker([])).build_security_information(admin) == {}

    def test_admin_visibility_follows_list_role(self):
        handler = RoleSecurityHandler(static_role_checker(["ROLE_APP_ADMIN_POST_LIST"]))
        post_admin = BaseAdmin("app.admin.post", security_handler=handler)
        tag_admin = BaseAdmin("app.admin.tag", security_handler=handler)

        assert post_admin.show_in("dashboard") is True
        assert tag_admin.show_in("dashboard") is False
