from typing import Callable, List, Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.config import settings
import structlog

logger = structlog.get_logger()

security = HTTPBearer(auto_error=False)


def _anonymous_user() -> dict:
    return {"user_id": "anonymous", "roles": [], "payload": {}}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _claim_roles(payload: dict) -> List[str]:
    roles = payload.get("roles", payload.get("role", []))
    if isinstance(roles, str):
        return [roles]
    return [r for r in roles if isinstance(r, str)]


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        logger.warning("JWT validation error", error=str(e))
        raise _unauthorized("Could not validate credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Token missing subject")
    return {"user_id": user_id, "roles": _claim_roles(payload), "payload": payload}


def require_roles(*roles: str) -> Callable[..., dict]:
    """
    Build a dependency that admits callers holding any of ``roles``.

    When auth is disabled every caller is admitted as an anonymous user.
    """
    allowed = set(roles)

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> dict:
        if not settings.auth_enabled:
            return _anonymous_user()

        if credentials is None or credentials.scheme.lower() != "bearer":
            raise _unauthorized("Not authenticated")

        user = verify_token(credentials.credentials)
        if allowed and not allowed.intersection(user["roles"]):
            logger.warning(
                "Role check failed",
                user_id=user["user_id"],
                required=sorted(allowed),
                roles=user["roles"],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return user

    return dependency


read_access = require_roles("User", "Admin")
admin_access = require_roles("Admin")
