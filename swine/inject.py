"""Bindings that tell inject.construct how to fill a class's init args from a registry."""

import os
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Type, TypeVar

if TYPE_CHECKING:
    from .registry import Registry

T = TypeVar("T")

_INJECT_BINDINGS_ATTR = "_inject_bindings"

# Default for config() meaning "raise KeyError when the name is missing".
_MISSING: Any = object()


class Deferred(Generic[T]):
    """A binding whose value is computed from the registry at construction time."""

    def __init__(self, compute: Callable[["Registry"], T], label: str) -> None:
        self._compute = compute
        self._label = label

    def resolve(self, registry_impl: "Registry") -> T:
        return self._compute(registry_impl)

    def __str__(self) -> str:
        return self._label


def _resolve_value(registry_impl: "Registry", value: Any) -> Any:
    if isinstance(value, Deferred):
        return value.resolve(registry_impl)
    return value


def _get_bindings(cls: Type[Any]) -> Dict[str, Any]:
    return getattr(cls, _INJECT_BINDINGS_ATTR, {})


def bind(**bindings: Any) -> Callable[[Type[T]], Type[T]]:
    """Decorator to bind values (plain or Deferred) for the init args of a class."""

    def wrap(cls: Type[T]) -> Type[T]:
        merged = dict(_get_bindings(cls))
        merged.update(bindings)
        setattr(cls, _INJECT_BINDINGS_ATTR, merged)
        return cls

    return wrap


def construct(registry_impl: "Registry", cls: Type[T], *args: Any, **kwargs: Any) -> T:
    """Instantiate cls, resolving its bound init args against the registry.
    Parameters:
        registry_impl: the registry used to resolve deferred bindings.
        cls: the class to instantiate.
        args: positional arguments passed through to the class.
        kwargs: keyword arguments passed through, overriding any binding of the same name.
    """
    init_kwargs = {
        name_: _resolve_value(registry_impl, value)
        for name_, value in _get_bindings(cls).items()
        if name_ not in kwargs
    }
    init_kwargs.update(kwargs)
    return cls(*args, **init_kwargs)


def config(
    name_: str, default: Any = _MISSING, fallback_to_envvar: bool = False
) -> Deferred[Any]:
    """
    Return a value from the registry config mapping.

    Parameters:
        name_: the config key. A key that is present is returned as is, even when None.
        default: returned when the key is missing; omit it to raise KeyError instead.
        fallback_to_envvar: True to check the environment variable of the same
            name before falling back to default.
    """

    def lookup(registry_impl: "Registry") -> Any:
        if name_ in registry_impl.config:
            return registry_impl.config[name_]
        if fallback_to_envvar and name_ in os.environ:
            return os.environ[name_]
        if default is _MISSING:
            raise KeyError(name_)
        return default

    return Deferred(lookup, f"config({name_})")


def function(func: Callable[..., T], *args: Any, **kwargs: Any) -> Deferred[T]:
    """Call func at construction time; Deferred args and kwargs are resolved first."""

    def call(registry_impl: "Registry") -> T:
        return func(
            *(_resolve_value(registry_impl, arg) for arg in args),
            **{key: _resolve_value(registry_impl, arg) for key, arg in kwargs.items()},
        )

    label = ", ".join(
        [str(arg) for arg in args] + [f"{key}={arg}" for key, arg in kwargs.items()]
    )
    return Deferred(call, f"{getattr(func, '__name__', func)}({label})")


# Resolves to the registry doing the construction.
self_tag: "Deferred[Registry]" = Deferred(lambda registry_impl: registry_impl, "self")
