# Bearer token + client id verification

from fastapi import Header, Request
import jwt
import structlog

from catalog.core.errors import CatalogError

logger = structlog.get_logger()


class UnauthorizedError(CatalogError):
    status_code = 401

    def __init__(self):
        super().__init__("Unauthorized")


async def require_principal(
        request: Request,
        authorization: str | None = Header(default=None),
        client_id: str | None = Header(default=None, alias="client-id")
) -> dict | None:
    """
    Verify the caller when auth is enabled.

    The principal (user_id, email, role) is stored on ``request.state`` and
    bound to the log context. Returns None when auth is disabled.
    """
    settings = request.app.state.settings
    if not settings.auth_enabled:
        return None

    if not settings.jwt_secret or not authorization or not client_id:
        logger.debug("auth_missing_parameters")
        raise UnauthorizedError()

    token = authorization.removeprefix("Bearer ").strip()
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    except jwt.PyJWTError as e:
        logger.debug("auth_invalid_token", error=str(e))
        raise UnauthorizedError()

    if client_id not in settings.client_ids or not claims.get("user_id"):
        logger.debug("auth_rejected", client_id=client_id)
        raise UnauthorizedError()

    principal = {
        "user_id": str(claims["user_id"]),
        "email": claims.get("email"),
        "role": claims.get("role"),
    }
    request.state.principal = principal
    structlog.contextvars.bind_contextvars(user_id=principal["user_id"], client_id=client_id)
    return principal
