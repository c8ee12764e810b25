import logging

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.config import Settings
from gps_tracking.database import get_db
from gps_tracking.dependencies import get_app_settings, get_current_identity, get_document_store, require_role
from gps_tracking.models.driver import Driver
from gps_tracking.schemas.driver import DriverResponse
from gps_tracking.security import ADMIN_ROLE, TokenIdentity
from gps_tracking.storage import DocumentStore
from gps_tracking.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/drivers", tags=["drivers"])

DRIVER_NOT_FOUND = "Driver not found"


async def _save_documents(
    documents: DocumentStore,
    ktp: UploadFile | None,
    sim: UploadFile | None,
) -> tuple[str | None, str | None]:
    ktp_file = await documents.save(ktp)
    try:
        sim_file = await documents.save(sim)
    except OSError:
        documents.discard(ktp_file)
        raise
    return ktp_file, sim_file


@router.get("")
async def list_drivers(
    jenis_kendaraan: str | None = Query(default=None),
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    query = select(Driver).order_by(Driver.id)
    if jenis_kendaraan:
        query = query.where(Driver.vehicle_type == jenis_kendaraan)

    result = await db.execute(query)
    drivers = result.scalars().all()
    return [DriverResponse.model_validate(d).model_dump() for d in drivers]


@router.post("", status_code=201)
async def create_driver(
    identity: TokenIdentity = Depends(require_role(ADMIN_ROLE)),
    name: str | None = Form(default=None),
    vehicle_number: str | None = Form(default=None, alias="vehicleNumber"),
    phone: str | None = Form(default=None),
    status: str | None = Form(default=None),
    vehicle_type: str | None = Form(default=None, alias="vehicleType"),
    ktp: UploadFile | None = File(default=None),
    sim: UploadFile | None = File(default=None),
    db: AsyncSession = Depends(get_db),
    documents: DocumentStore = Depends(get_document_store),
):
    ktp_file, sim_file = await _save_documents(documents, ktp, sim)

    driver = Driver(
        name=name,
        vehicle_number=vehicle_number,
        phone=phone,
        status=status,
        vehicle_type=vehicle_type,
        ktp_url=ktp_file,
        sim_url=sim_file,
    )
    try:
        db.add(driver)
        await db.commit()
        await db.refresh(driver)
    except SQLAlchemyError:
        documents.discard(ktp_file, sim_file)
        raise

    logger.info("Driver %s created by admin %s", driver.id, identity.id)
    return DriverResponse.model_validate(driver).model_dump()


@router.put("/{driver_id}")
async def update_driver(
    driver_id: int,
    identity: TokenIdentity = Depends(require_role(ADMIN_ROLE)),
    name: str | None = Form(default=None),
    vehicle_number: str | None = Form(default=None, alias="vehicleNumber"),
    phone: str | None = Form(default=None),
    status: str | None = Form(default=None),
    vehicle_type: str | None = Form(default=None, alias="vehicleType"),
    ktp: UploadFile | None = File(default=None),
    sim: UploadFile | None = File(default=None),
    db: AsyncSession = Depends(get_db),
    documents: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_app_settings),
):
    driver = await db.get(Driver, driver_id)
    if driver is None:
        raise NotFoundError(DRIVER_NOT_FOUND)

    ktp_file, sim_file = await _save_documents(documents, ktp, sim)

    try:
        driver.name = name
        driver.vehicle_number = vehicle_number
        driver.phone = phone
        driver.status = status
        driver.vehicle_type = vehicle_type
        # without a new upload the reference is cleared unless preserving is switched on
        if ktp_file is not None or not settings.preserve_documents_on_update:
            driver.ktp_url = ktp_file
        if sim_file is not None or not settings.preserve_documents_on_update:
            driver.sim_url = sim_file
        await db.commit()
        await db.refresh(driver)
    except SQLAlchemyError:
        documents.discard(ktp_file, sim_file)
        raise

    logger.info("Driver %s updated by admin %s", driver.id, identity.id)
    return DriverResponse.model_validate(driver).model_dump()


@router.delete("/{driver_id}", status_code=204)
async def delete_driver(
    driver_id: int,
    identity: TokenIdentity = Depends(require_role(ADMIN_ROLE)),
    db: AsyncSession = Depends(get_db),
):
    driver = await db.get(Driver, driver_id)
    if driver is None:
        raise NotFoundError(DRIVER_NOT_FOUND)

    # stored documents stay on disk
    await db.delete(driver)
    await db.commit()

    logger.info("Driver %s deleted by admin %s", driver_id, identity.id)
    return Response(status_code=204)


@router.get("/{driver_id}")
async def get_driver(
    driver_id: int,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    driver = await db.get(Driver, driver_id)
    if driver is None:
        raise NotFoundError(DRIVER_NOT_FOUND)
    return DriverResponse.model_validate(driver).model_dump()
