from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from gps_tracking.config import Settings

ADMIN_ROLE = "admin"
COMPANY_ROLE = "company"

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class TokenIdentity:
    id: int
    role: str


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode())
    except ValueError:
        # stored value is not a bcrypt hash
        return False


# compared against when a username is unknown, so both login failures cost one bcrypt check
DUMMY_PASSWORD_HASH = hash_password("gps-tracking-unknown-user")


def create_access_token(
    identity: TokenIdentity,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.token_expire_minutes)
    claims = {
        "id": identity.id,
        "role": identity.role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenIdentity:
    """Verify signature and expiry, then return the embedded identity.

    Raises JWTError for anything that is not a valid, unexpired token carrying both claims.
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    user_id = payload.get("id")
    role = payload.get("role")
    if user_id is None or role is None:
        raise JWTError("Token is missing identity claims")
    return TokenIdentity(id=user_id, role=role)
