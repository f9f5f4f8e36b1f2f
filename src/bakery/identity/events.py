"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from bakery.domain import bakery


@bakery.event(part_of="User")
class UserRegistered:
    """A shopper created an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)
