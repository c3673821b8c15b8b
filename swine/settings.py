"""Tunable values used by the mock entities, read from the registry config."""

from attr import define, field, validators

from . import inject

DEFAULT_IMAGE_URL = "http://www.superarts.org/swine/default.png"


@define(frozen=True)
class EntitySettings:
    # identifier assigned by a successful create()
    success_uid: int = field(default=1, converter=int, validator=validators.ge(0))
    default_image_url: str = DEFAULT_IMAGE_URL
    image_url_format: str = "http://test.com/image{uid:03d}.png"
    username_format: str = "test{uid:03d}"
    # identifier an avatar uses to fetch its author
    linked_uid: int = field(default=42, converter=int)

    def format_username(self, uid: int) -> str:
        return self.username_format.format(uid=uid)

    def format_image_url(self, uid: int) -> str:
        return self.image_url_format.format(uid=uid)


# Deferred EntitySettings built from SWINE_* config keys, falling back to
# environment variables of the same name, then to the defaults above.
configured = inject.function(
    EntitySettings,
    success_uid=inject.config("SWINE_SUCCESS_UID", 1, fallback_to_envvar=True),
    default_image_url=inject.config(
        "SWINE_DEFAULT_IMAGE_URL", DEFAULT_IMAGE_URL, fallback_to_envvar=True
    ),
    image_url_format=inject.config(
        "SWINE_IMAGE_URL_FORMAT", "http://test.com/image{uid:03d}.png", fallback_to_envvar=True
    ),
    username_format=inject.config(
        "SWINE_USERNAME_FORMAT", "test{uid:03d}", fallback_to_envvar=True
    ),
    linked_uid=inject.config("SWINE_LINKED_UID", 42, fallback_to_envvar=True),
)
