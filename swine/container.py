from typing import Optional

from . import inject
from .entities import MockAvatar, MockUser
from .registry import Registry, initialize
from .types import Avatar, User


def setup(registry: Optional[Registry] = None) -> Registry:
    """Register the User and Avatar factories, each with and without an argument."""
    if registry is None:
        registry = initialize()

    registry.register(User, lambda r: inject.construct(r, MockUser))
    registry.register(User, lambda r, username: inject.construct(r, MockUser, username))
    registry.register(Avatar, lambda r: inject.construct(r, MockAvatar))
    registry.register(Avatar, lambda r, author: inject.construct(r, MockAvatar, author))
    return registry
