"""
Provider implementations for different instantiation strategies.
"""

from typing import Any, Callable, Optional, Sequence, Type

from .core import ProviderMeta, ResolveCtx, token_to_key


class FactoryProvider:
    """
    Provider that calls a factory function to produce instances.

    Declared dependencies are resolved through the container and passed
    positionally, in order.
    """

    __slots__ = ("_meta", "_factory", "_dependencies")

    def __init__(
        self,
        factory: Callable[..., Any],
        token: Type | str,
        *,
        dependencies: Sequence[Type | str] = (),
        scope: str = "singleton",
        tags: tuple[str, ...] = (),
        name: Optional[str] = None,
    ):
        self._factory = factory
        self._dependencies = tuple(token_to_key(dep) for dep in dependencies)

        self._meta = ProviderMeta(
            name=name or getattr(factory, "__name__", "factory"),
            token=token_to_key(token),
            scope=scope,
            tags=tags,
            module=getattr(factory, "__module__", "") or "",
            qualname=getattr(factory, "__qualname__", "") or "",
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self._dependencies

    def instantiate(self, ctx: ResolveCtx) -> Any:
        """Call factory with resolved dependencies."""
        args = [ctx.get(dep) for dep in self._dependencies]
        return self._factory(*args)


class ValueProvider:
    """Provider that returns a pre-bound constant value."""

    __slots__ = ("_meta", "_value")

    def __init__(
        self,
        value: Any,
        token: Type | str,
        name: Optional[str] = None,
        scope: str = "singleton",
        tags: tuple[str, ...] = (),
    ):
        self._value = value
        self._meta = ProviderMeta(
            name=name or "value",
            token=token_to_key(token),
            scope=scope,
            tags=tags,
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    def instantiate(self, ctx: ResolveCtx) -> Any:
        """Return pre-bound value."""
        return self._value


class AliasProvider:
    """Provider that resolves to another registered service."""

    __slots__ = ("_meta", "_target")

    def __init__(self, token: Type | str, target: Type | str):
        self._target = token_to_key(target)
        self._meta = ProviderMeta(
            name=f"alias:{self._target}",
            token=token_to_key(token),
            scope="transient",
        )

    @property
    def meta(self) -> ProviderMeta:
        return self._meta

    @property
    def target(self) -> str:
        return self._target

    def instantiate(self, ctx: ResolveCtx) -> Any:
        """Resolve the target service."""
        return ctx.get(self._target)
