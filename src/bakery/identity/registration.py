"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from bakery.domain import bakery
from bakery.errors import InvalidInput
from bakery.identity.email import is_valid_email
from bakery.identity.user import User

logger = structlog.get_logger(__name__)


@bakery.command(part_of="User")
class RegisterUser:
    """Create an account from an already-hashed password."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)


@bakery.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = command.email.strip().lower()
        if not is_valid_email(email):
            raise InvalidInput("Please enter a valid email")

        repo = current_domain.repository_for(User)
        if repo.find_by_email(email) is not None:
            raise InvalidInput("User already exists")

        user = User.register(
            name=command.name.strip(),
            email=email,
            password_hash=command.password_hash,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
