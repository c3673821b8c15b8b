"""
The Registry builds protocol-typed entities from registered factories.

Instead of constructing concrete classes at every call site, code asks a
Registry for an interface, optionally with one constructor argument, and the
Registry calls whichever factory was registered for that interface and
argument count. Every resolution returns a fresh instance; there are no
singletons, scopes or dependency graphs.

from swine import container, types
my_registry = container.setup()
user = my_registry.require(types.User, "test001")
avatar = my_registry.require(types.Avatar, user)

Factories receive the registry as their first argument, followed by the
arguments passed to resolve. The number of arguments after the registry is
part of the key, so one interface can have a default factory and a
one-argument factory side by side:

my_registry.register(types.User, lambda r: MockUser())
my_registry.register(types.User, lambda r, username: MockUser(username))

resolve returns None when nothing is registered for the requested interface
and argument count; require (and registry[iface]) raise KeyError instead.

Classes can declare registry-provided init args with inject.bind and be
instantiated with inject.construct, which resolves those bindings:

@inject.bind(settings=inject.config("SETTINGS"))
class Thing:
    def __init__(self, settings): ...

my_registry.register(Thing, lambda r: inject.construct(r, Thing))
"""

__version__ = "1.0.0"

from . import inject
from .registry import Registry, initialize

__all__ = [
    "inject",
    "initialize",
    "Registry",
]
