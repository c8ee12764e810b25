import logging

from fastapi import Depends, Header, Request
from jose import JWTError

from gps_tracking.config import Settings
from gps_tracking.security import TokenIdentity, decode_access_token
from gps_tracking.storage import DocumentStore
from gps_tracking.utils.exceptions import AuthError

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.documents


async def get_current_identity(
    authorization: str = Header(default=""),
    settings: Settings = Depends(get_app_settings),
) -> TokenIdentity:
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthError()
    try:
        return decode_access_token(parts[1], settings)
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthError() from e


def require_role(*roles: str):
    """Dependency factory: authenticate, then allow only identities holding one of ``roles``."""

    async def check_role(identity: TokenIdentity = Depends(get_current_identity)) -> TokenIdentity:
        if identity.role not in roles:
            raise AuthError()
        return identity

    return check_role
