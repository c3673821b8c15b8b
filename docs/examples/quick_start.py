# Build the same user and avatar twice: once by hand, once through the registry.
from swine import container
from swine.entities import MockAvatar, MockUser
from swine.types import Avatar, User

# Manual construction
user = MockUser()
user.username = "test001"

avatar = MockAvatar(author=user)
avatar.create()

user.avatar = avatar
user.create()

print(f"User - {user}")
print(f"Avatar - {avatar}")
print("----")

# Construction through the registry
registry = container.setup()

new_user = registry.require(User, "test001")

new_avatar = registry.require(Avatar, new_user)
new_avatar.create()

new_user.avatar = new_avatar
new_user.create()

queried_avatar = registry.require(Avatar)
queried_avatar.show(42)

queried_user = registry.require(User)
queried_user.show(42)

print(f"newUser - {new_user}")
print(f"newAvatar - {new_avatar}")
print(f"queriedAvatar - {queried_avatar}")
print(f"queriedUser - {queried_user}")
print(f"queriedUser's avatar - {queried_user.avatar}")
print("----")

assert new_user.uid == 1 and new_avatar.author is new_user
assert queried_user.username == "test042" and queried_user.avatar is not None
assert queried_avatar.image_url == "http://test.com/image042.png"
