"""FastAPI dependencies for reaching services and resolving the caller."""

from fastapi import Depends, Header, Request
from protean.utils.globals import current_domain

from bakery.errors import Forbidden, Unauthorized
from bakery.identity.tokens import Capability, Principal
from bakery.identity.user import User


async def get_services(request: Request):
    return request.app.state.services


def _extract_token(authorization: str | None, legacy_token: str | None) -> str | None:
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if legacy_token:
        return legacy_token.strip() or None
    return None


async def get_principal(
    services=Depends(get_services),
    authorization: str | None = Header(default=None),
    token: str | None = Header(default=None),
) -> Principal:
    """Resolve the bearer token (or the legacy ``token`` header) to a principal.

    Admin tokens are not tied to a stored user. Any other token must name a
    user that still exists.
    """
    raw = _extract_token(authorization, token)
    if not raw:
        raise Unauthorized("Not authorized, no token")

    claims = services.tokens.decode(raw)
    if claims.is_admin:
        return Principal.from_claims(claims)

    user = current_domain.repository_for(User)._dao.query.filter(id=claims.subject).all().first
    if user is None:
        raise Unauthorized("User not found")

    return Principal.from_claims(claims, user=user)


async def get_current_user(principal: Principal = Depends(get_principal)) -> User:
    if principal.user is None:
        raise Unauthorized("Login as a customer to continue")
    return principal.user


def require(capability: Capability):
    """Build a dependency that admits only principals holding ``capability``."""

    async def _require(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.has(capability):
            raise Forbidden("Not authorized, admin access required")
        return principal

    return _require


require_admin = require(Capability.ADMIN)
