"""Bearer token helpers resolving the caller identity."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from asset_api.core.config import Settings, get_settings
from asset_api.modules.assets.models import OWNER_ID_MAX_LENGTH, CallerIdentity
from asset_api.schemas import TokenData

security = HTTPBearer(auto_error=False)


class AuthenticationError(Exception):
    """Raised when a bearer token is missing or cannot be verified."""


def get_request_settings(request: Request) -> Settings:
    """Settings the running app was built with, falling back to the environment."""
    return getattr(request.app.state, "settings", None) or get_settings()


def create_access_token(
    owner_id: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.security.access_token_expire_minutes)
    payload = {
        "sub": owner_id,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    if settings.security.audience:
        payload["aud"] = settings.security.audience
    if settings.security.issuer:
        payload["iss"] = settings.security.issuer
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenData:
    options = {"verify_aud": settings.security.audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            audience=settings.security.audience,
            issuer=settings.security.issuer,
            options=options,
        )
    except JWTError as exc:
        raise AuthenticationError("Could not validate credentials") from exc

    owner_id = payload.get("sub")
    if not isinstance(owner_id, str) or not owner_id.strip() or len(owner_id) > OWNER_ID_MAX_LENGTH:
        raise AuthenticationError("Could not validate credentials")
    return TokenData(owner_id=owner_id.strip())


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_request_settings),
) -> CallerIdentity:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        token_data = decode_access_token(credentials.credentials, settings)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return CallerIdentity(owner_id=token_data.owner_id)


__all__ = [
    "AuthenticationError",
    "create_access_token",
    "decode_access_token",
    "get_current_caller",
    "get_request_settings",
]
