"""Password hashing with bcrypt."""

import bcrypt

from bakery.errors import InvalidInput

MIN_PASSWORD_LENGTH = 8
# bcrypt ignores everything past 72 bytes
MAX_PASSWORD_BYTES = 72


def check_password_strength(password: str | None) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput("Please enter a strong password")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInput("Please enter a strong password")


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False
