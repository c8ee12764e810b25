import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.config import Settings
from gps_tracking.models.user import User
from gps_tracking.models.vehicle import Vehicle
from gps_tracking.security import ADMIN_ROLE, hash_password

logger = logging.getLogger(__name__)


SEED_VEHICLES = [
    {"vehicle_number": "B 1234 ABC", "vehicle_type": "truck"},
    {"vehicle_number": "B 5678 DEF", "vehicle_type": "truck"},
    {"vehicle_number": "D 2468 GHI", "vehicle_type": "van"},
    {"vehicle_number": "F 1357 JKL", "vehicle_type": "motorcycle"},
]


async def seed_data(session: AsyncSession, settings: Settings) -> None:
    if settings.seed_demo_data:
        result = await session.execute(select(Vehicle).limit(1))
        if result.scalars().first() is None:
            for v in SEED_VEHICLES:
                session.add(Vehicle(**v))
            logger.info("Seeded %d vehicles", len(SEED_VEHICLES))

    if settings.seed_admin_password:
        result = await session.execute(select(User).where(User.username == settings.seed_admin_username))
        if result.scalars().first() is None:
            session.add(User(
                username=settings.seed_admin_username,
                password=hash_password(settings.seed_admin_password, settings.bcrypt_rounds),
                role=ADMIN_ROLE,
            ))
            logger.info("Seeded admin account %s", settings.seed_admin_username)

    await session.commit()
