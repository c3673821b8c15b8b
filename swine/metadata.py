"""Metadata describes which factory produces an interface for a given argument count."""

import inspect
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, Tuple, Type, TypeVar

from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from .registry import Registry

T_co = TypeVar("T_co", covariant=True)

# A factory key is the produced interface plus the number of arguments the
# factory takes after the registry.
FactoryKey: TypeAlias = Tuple[type, int]
Factory: TypeAlias = Callable[..., Any]


def _infer_arity(factory: Factory) -> int:
    """
    Count the arguments a factory expects after the leading registry parameter.
    Raises:
        TypeError: if the signature is variadic or has no registry parameter.
    """
    positional = 0
    for param in inspect.signature(factory).parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            raise TypeError(f"cannot infer arity of variadic factory {factory!r}, pass arity")
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    if not positional:
        raise TypeError(f"factory {factory!r} must accept the registry as its first argument")
    return positional - 1


class FactoryMetadata(Generic[T_co]):
    """Metadata for a registered factory."""

    def __init__(self, iface: Type[T_co], factory: Factory, arity: Optional[int] = None):
        if arity is None:
            arity = _infer_arity(factory)
        elif arity < 0:
            raise ValueError(f"arity must be non-negative, got {arity}")
        self._iface = iface
        self._arity = arity
        self._factory = factory

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def key(self) -> FactoryKey:
        """The interface and argument count identifying this entry in the registry."""
        return (self._iface, self._arity)

    def _call(self, registry_impl: "Registry", *args: Any) -> T_co:
        if len(args) != self._arity:
            raise TypeError(
                f"factory for {self._iface.__name__} takes {self._arity} argument(s), "
                f"got {len(args)}"
            )
        return self._factory(registry_impl, *args)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FactoryMetadata):
            return self.key == other.key
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self._iface.__name__}/{self._arity}"

    def __repr__(self) -> str:
        return f"<FactoryMetadata {self}>"
