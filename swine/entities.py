"""Mock User and Avatar entities standing in for fetched domain objects."""
import logging
from typing import TYPE_CHECKING, Optional

from attr import Factory, define, field

from . import inject
from .settings import EntitySettings, configured as configured_settings
from .types import UNSET_UID, Avatar, ErrorCallback, User

if TYPE_CHECKING:
    from .registry import Registry

LOG = logging.getLogger(__name__)


class PresentableMixin:
    """Default identity and creation behaviour shared by every entity."""

    __slots__ = ()

    uid: int
    resolver: "Optional[Registry]"
    settings: EntitySettings

    def is_valid(self) -> bool:
        return self.uid >= 0

    def create(self, completion: Optional[ErrorCallback] = None) -> None:
        """Mark the entity as created and report success to completion, if given."""
        self.uid = self.settings.success_uid
        LOG.debug("created %s %d", type(self).__name__, self.uid)
        if completion is not None:
            completion(None)

    def _registry(self) -> "Registry":
        if self.resolver is None:
            raise ValueError(
                f"{type(self).__name__} was not built by a registry, cannot fetch linked entities"
            )
        return self.resolver


@inject.bind(resolver=inject.self_tag, settings=configured_settings)
@define(eq=False)
class MockUser(PresentableMixin):
    username: Optional[str] = None
    avatar: Optional[Avatar] = None
    uid: int = UNSET_UID
    resolver: "Optional[Registry]" = field(default=None, repr=False)
    settings: EntitySettings = field(factory=EntitySettings, repr=False)

    def show(self, uid: int) -> None:
        """Fetch the user with the given identifier, attaching a newly created avatar.
        Fields are left untouched if the avatar cannot be resolved.
        """
        LOG.debug("showing user %d", uid)
        avatar = self._registry().require(Avatar, self)
        avatar.create()

        self.uid = uid
        self.username = self.settings.format_username(uid)
        self.avatar = avatar


@inject.bind(resolver=inject.self_tag, settings=configured_settings)
@define(eq=False)
class MockAvatar(PresentableMixin):
    # not owned, and left out of repr so a user and its avatar print without recursing
    author: Optional[User] = field(default=None, repr=False)
    uid: int = UNSET_UID
    resolver: "Optional[Registry]" = field(default=None, repr=False)
    settings: EntitySettings = field(factory=EntitySettings, repr=False)
    image_url: str = field(
        default=Factory(lambda self: self.settings.default_image_url, takes_self=True)
    )

    def show(self, uid: int) -> None:
        """Fetch the avatar with the given identifier along with its author."""
        LOG.debug("showing avatar %d", uid)
        user = self._registry().require(User)
        user.show(self.settings.linked_uid)

        self.uid = uid
        self.image_url = self.settings.format_image_url(uid)
        self.author = user
