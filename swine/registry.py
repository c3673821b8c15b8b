"""The Registry maps an interface and an argument count to the factory building it."""
import functools
import logging
from threading import RLock
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from typing_extensions import Concatenate, ParamSpec

from .metadata import Factory, FactoryKey, FactoryMetadata

LOG = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")
P = ParamSpec("P")


def initialize(config: Optional[Mapping[str, Any]] = None) -> "Registry":
    """Initialize a new registry instance."""
    LOG.debug("initializing a new registry instance")
    return Registry(config)


def _synchronized(
    func: Callable[Concatenate["Registry", P], R]
) -> Callable[Concatenate["Registry", P], R]:
    """Decorator to synchronize method access with a reentrant lock."""

    @functools.wraps(func)
    def wrapper(self: "Registry", *args: P.args, **kwargs: P.kwargs) -> R:
        with self._lock:
            return func(self, *args, **kwargs)

    return wrapper


class Registry:
    """Tracks registered factories and builds a new instance on every resolution."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._by_key: Dict[FactoryKey, FactoryMetadata] = {}
        self._config: Mapping[str, Any] = config if config is not None else {}

        self._lock = RLock()

    @property
    def config(self) -> Mapping[str, Any]:
        """The configuration mapping read by inject.config bindings."""
        return self._config

    @_synchronized
    def register(self, iface: Type[T], factory: Factory, arity: Optional[int] = None) -> None:
        """Register a factory for an interface.

        Parameters:
            iface: the interface the factory produces.
            factory: callable invoked as factory(registry, *args).
            arity: number of arguments after the registry. Inferred from
                the factory signature when omitted.
        """
        meta = FactoryMetadata(iface, factory, arity)
        if meta.key in self._by_key:
            LOG.debug("replacing factory for %s", meta)
        else:
            LOG.debug("registering factory for %s", meta)
        self._by_key[meta.key] = meta

    @_synchronized
    def _get_by_key(self, key: FactoryKey) -> Optional[FactoryMetadata]:
        return self._by_key.get(key)

    def resolve(self, iface: Type[T], *args: Any) -> Optional[T]:
        """Build a new instance of an interface.

        Parameters:
            iface: the interface to build.
            args: arguments passed to the factory after the registry.
        Returns:
            A fresh instance, or None if no factory is registered for
            the interface with this many arguments.
        """
        meta = self._get_by_key((iface, len(args)))
        if meta is None:
            LOG.debug("no factory for %r with %d argument(s)", iface, len(args))
            return None
        return meta._call(self, *args)

    def require(self, iface: Type[T], *args: Any) -> T:
        """Build a new instance of an interface.
        Raises:
            KeyError: if no factory is registered for the interface with this many arguments.
        """
        meta = self._get_by_key((iface, len(args)))
        if meta is None:
            raise KeyError((iface, len(args)))
        return meta._call(self, *args)

    @_synchronized
    def __len__(self) -> int:
        return len(self._by_key)

    @_synchronized
    def __contains__(self, key) -> bool:
        """Check if a factory is registered.
        Parameters:
            key: an interface, matching a factory of any arity, or an
                (interface, arity) tuple matching exactly.
        Returns:
            True if a matching factory is registered, false otherwise.
        """
        if isinstance(key, type):
            return any(iface is key for iface, _ in self._by_key)
        elif isinstance(key, tuple) and len(key) == 2:
            return key in self._by_key
        else:
            raise KeyError(f"invalid key for Registry: {key!r}")

    def __getitem__(self, iface: Type[T]) -> T:
        """Build a new instance of an interface using its zero-argument factory.
        Raises:
            KeyError: if no zero-argument factory is registered.
        """
        return self.require(iface)
