import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.config import Settings
from gps_tracking.database import get_db
from gps_tracking.dependencies import get_app_settings, get_current_identity, require_role
from gps_tracking.models.company import Company
from gps_tracking.schemas.auth import FeaturesResponse, LoginRequest, RegisterRequest
from gps_tracking.security import ADMIN_ROLE, TokenIdentity, create_access_token
from gps_tracking.services.companies import register_company
from gps_tracking.services.login import CompanyLogin, LoginStrategy, UserLogin
from gps_tracking.utils.exceptions import AppException
from gps_tracking.utils.response import describe_validation_errors

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

company_login = CompanyLogin()
user_login = UserLogin()


async def _login(strategy: LoginStrategy, payload: LoginRequest, db: AsyncSession, settings: Settings) -> dict:
    if not payload.username or not payload.password:
        raise AppException("Username and password are required", status_code=400)

    result = await strategy.authenticate(db, payload.username, payload.password)
    if result is None:
        logger.warning("Failed %s login for username %r", strategy.profile_key, payload.username)
        raise AppException("Invalid username or password", status_code=401)

    token = create_access_token(result.identity, settings)
    return {"token": token, result.profile_key: result.profile}


@router.post("/register", status_code=201)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    created = await register_company(db, payload, settings)
    return created.model_dump(by_alias=True)


@router.post("/login")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return await _login(company_login, payload, db, settings)


@router.post("/admin/login")
async def admin_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return await _login(user_login, payload, db, settings)


async def _read_register_payload(request: Request) -> RegisterRequest:
    try:
        body = await request.json()
    except ValueError as e:
        raise AppException("Request body must be valid JSON", status_code=400) from e
    try:
        return RegisterRequest.model_validate(body)
    except ValidationError as e:
        raise AppException(describe_validation_errors(e.errors()), status_code=400) from e


# the body is read inside the handler so the role check always comes first
@router.post(
    "/admin/register",
    status_code=201,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": RegisterRequest.model_json_schema()}},
        }
    },
)
async def admin_register(
    request: Request,
    identity: TokenIdentity = Depends(require_role(ADMIN_ROLE)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    payload = await _read_register_payload(request)
    created = await register_company(db, payload, settings)
    logger.info("Company %s registered by admin %s", created.id, identity.id)
    return created.model_dump(by_alias=True)


@router.get("/features")
async def get_features(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Company.features).where(Company.id == identity.id))
    features = result.scalars().first()
    return FeaturesResponse(features=features or []).model_dump()
