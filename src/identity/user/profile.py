"""Self-service profile changes: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.directory import get_user
from identity.user.registration import ensure_email_available
from identity.user.user import User
from shared.media import destroy_image, upload_image


@identity.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(min_length=4, max_length=30)
    email: String(max_length=254)
    avatar: Text()  # new image source; the previous avatar is destroyed


@identity.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        user = get_user(command.user_id)

        email = ensure_email_available(command.email, user_id=user.id) if command.email else None

        avatar = None
        if command.avatar:
            avatar = upload_image(command.avatar, "avatars")
            if user.avatar is not None:
                destroy_image(user.avatar.public_id)

        user.update_profile(name=command.name, email=email, avatar=avatar)
        current_domain.repository_for(User).add(user)
        return str(user.id)
