"""Login strategies, one per identity store.

Companies sign in against the ``companies`` table and always get the ``company`` role;
staff accounts sign in against ``users`` and carry whatever role is stored on the row.
Both strategies answer ``None`` for an unknown username and for a wrong password, so
callers cannot tell the two apart.
"""
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.models.company import Company
from gps_tracking.models.user import User
from gps_tracking.schemas.auth import CompanyProfile, UserProfile
from gps_tracking.security import COMPANY_ROLE, DUMMY_PASSWORD_HASH, TokenIdentity, verify_password


@dataclass(frozen=True)
class LoginResult:
    identity: TokenIdentity
    profile_key: str
    profile: dict[str, Any]


class LoginStrategy(Protocol):
    profile_key: str

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> LoginResult | None:
        ...


class CompanyLogin:
    profile_key = "company"

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> LoginResult | None:
        result = await db.execute(select(Company).where(Company.username == username))
        company = result.scalars().first()

        if company is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, company.password):
            return None

        profile = CompanyProfile(id=company.id, company_name=company.name, features=company.features or [])
        return LoginResult(
            identity=TokenIdentity(id=company.id, role=COMPANY_ROLE),
            profile_key=self.profile_key,
            profile=profile.model_dump(by_alias=True),
        )


class UserLogin:
    profile_key = "user"

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> LoginResult | None:
        result = await db.execute(select(User).where(User.username == username))
        user = result.scalars().first()

        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, user.password):
            return None

        profile = UserProfile(id=user.id, username=user.username, role=user.role)
        return LoginResult(
            identity=TokenIdentity(id=user.id, role=user.role),
            profile_key=self.profile_key,
            profile=profile.model_dump(),
        )
