"""Pydantic request/response schemas for the identity API."""

from pydantic import Field

from bakery.shared.schemas import CamelModel

# --- Request Schemas ---


class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Asha", "email": "asha@example.com", "password": "password1"}]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str


class LoginRequest(CamelModel):
    email: str
    password: str


# --- Response Schemas ---


class UserSummary(CamelModel):
    id: str
    name: str
    email: str

    @classmethod
    def of(cls, user) -> "UserSummary":
        return cls(id=str(user.id), name=user.name, email=user.email)


class TokenResponse(CamelModel):
    success: bool = True
    token: str
    user: UserSummary | None = None


class AdminTokenResponse(CamelModel):
    success: bool = True
    token: str
    is_admin: bool = True
    user: UserSummary


class MeResponse(CamelModel):
    success: bool = True
    message: str = "User authenticated"
    user: UserSummary
