import logging

from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.config import Settings
from gps_tracking.models.company import Company
from gps_tracking.schemas.auth import RegisterRequest, RegisterResponse
from gps_tracking.security import hash_password
from gps_tracking.utils.exceptions import AppException

logger = logging.getLogger(__name__)


async def register_company(db: AsyncSession, payload: RegisterRequest, settings: Settings) -> RegisterResponse:
    # username uniqueness is left to the table constraint
    if not payload.company_name or not payload.username or not payload.password:
        raise AppException("Company name, username, and password are required", status_code=400)

    company = Company(
        name=payload.company_name,
        username=payload.username,
        password=hash_password(payload.password, settings.bcrypt_rounds),
        features=payload.features or [],
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)

    logger.info("Registered company %s (id=%s)", company.name, company.id)
    return RegisterResponse(id=company.id, company_name=company.name)
