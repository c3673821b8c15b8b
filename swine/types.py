from typing import Callable, Optional

from typing_extensions import Protocol, TypeAlias, runtime_checkable

# Invoked once creation finishes; the argument is the error, if any.
ErrorCallback: TypeAlias = Callable[[Optional[Exception]], None]

# Identifier of an entity that has not been created or fetched yet.
UNSET_UID = -1


@runtime_checkable
class Indexable(Protocol):
    """Anything carrying an integer identifier."""

    uid: int

    def is_valid(self) -> bool: ...


@runtime_checkable
class Presentable(Indexable, Protocol):
    """An indexable entity that can be created and fetched for display."""

    def create(self, completion: Optional[ErrorCallback] = None) -> None: ...

    def show(self, uid: int) -> None: ...


@runtime_checkable
class User(Presentable, Protocol):
    username: Optional[str]
    avatar: "Optional[Avatar]"


@runtime_checkable
class Avatar(Presentable, Protocol):
    image_url: str
    author: Optional[User]
