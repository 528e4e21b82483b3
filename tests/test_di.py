"""
Service container: providers, caching, cycles, in-memory locator.
"""

import pytest

from aquiladmin.di.core import Container, ServiceLocator, token_to_key
from aquiladmin.di.errors import (
    DuplicateServiceError,
    ServiceCircularReferenceError,
    ServiceNotFoundError,
)
from aquiladmin.di.providers import AliasProvider, FactoryProvider, ValueProvider
from aquiladmin.di.testing import InMemoryLocator


class Greeter:
    pass


# ============================================================================
# Container
# ============================================================================

class TestContainer:

    def test_register_and_get(self, container):
        container.register(ValueProvider("hello", "greeting"))

        assert container.get("greeting") == "hello"
        assert container.has("greeting") is True
        assert container.has("missing") is False

    def test_is_service_locator(self, container):
        assert isinstance(container, ServiceLocator)
        assert isinstance(InMemoryLocator(), ServiceLocator)

    def test_type_tokens(self, container):
        greeter = Greeter()
        container.register_instance(Greeter, greeter)

        assert container.get(Greeter) is greeter
        assert container.has(token_to_key(Greeter)) is True

    def test_not_found(self, container):
        container.register(ValueProvider(1, "app.admin.post"))

        with pytest.raises(ServiceNotFoundError) as exc_info:
            container.get("app.admin")

        assert exc_info.value.service_id == "app.admin"
        assert exc_info.value.candidates == ["app.admin.post"]

    def test_not_found_reports_requester(self, container):
        container.register(FactoryProvider(lambda dep: dep, "a", dependencies=("b",)))

        with pytest.raises(ServiceNotFoundError) as exc_info:
            container.get("a")

        assert exc_info.value.requested_by == "a"

    def test_singleton_is_cached(self, container):
        calls = []
        container.register(FactoryProvider(lambda: calls.append(1) or object(), "svc"))

        assert container.get("svc") is container.get("svc")
        assert len(calls) == 1

    def test_transient_is_not_cached(self, container):
        container.register(FactoryProvider(object, "svc", scope="transient"))

        assert container.get("svc") is not container.get("svc")

    def test_factory_dependencies(self, container):
        container.register(ValueProvider("Post", "label"))
        container.register(FactoryProvider(lambda label: f"admin:{label}", "admin", dependencies=("label",)))

        assert container.get("admin") == "admin:Post"

    def test_alias(self, container):
        container.register(ValueProvider(42, "answer"))
        container.register(AliasProvider("alias", "answer"))

        assert container.get("alias") == 42

    def test_circular_reference(self, container):
        container.register(FactoryProvider(lambda b: b, "a", dependencies=("b",)))
        container.register(FactoryProvider(lambda a: a, "b", dependencies=("a",)))

        with pytest.raises(ServiceCircularReferenceError) as exc_info:
            container.get("a")

        assert exc_info.value.path == ["a", "b", "a"]

    def test_duplicate_registration(self, container):
        provider = ValueProvider(1, "x")
        container.register(provider)
        container.register(provider)

        with pytest.raises(DuplicateServiceError):
            container.register(ValueProvider(2, "x"))

    def test_ids_keep_registration_order(self, container):
        for token in ("c", "a", "b"):
            container.register(ValueProvider(token, token))

        assert container.ids() == ["c", "a", "b"]

    def test_child_container(self, container):
        container.register(FactoryProvider(object, "shared"))
        child = container.create_child()
        child.register(ValueProvider("local", "local"))

        assert child.get("shared") is container.get("shared")
        assert child.get("local") == "local"
        assert container.has("local") is False

    def test_reset(self, container):
        container.register(FactoryProvider(object, "svc"))
        first = container.get("svc")
        container.reset()

        assert container.get("svc") is not first


# ============================================================================
# InMemoryLocator
# ============================================================================

class TestInMemoryLocator:

    def test_dict_backed(self):
        locator = InMemoryLocator({"a": 1})

        assert locator.get("a") == 1
        assert locator.has("a") is True
        assert locator.has("b") is False
        with pytest.raises(ServiceNotFoundError):
            locator.get("b")
        assert locator.calls == ["a", "b"]

    def test_callable_backed(self):
        locator = InMemoryLocator(lambda service_id: service_id.upper())

        assert locator.get("a") == "A"
        assert locator.has("anything") is True

    def test_set_and_reset(self):
        locator = InMemoryLocator()
        locator.set("a", 1)
        locator.get("a")
        locator.reset()

        assert locator.calls == []
        assert locator.get("a") == 1
