from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gps_tracking.database import get_db
from gps_tracking.models.vehicle import Vehicle
from gps_tracking.schemas.vehicle import VehicleResponse

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("")
async def get_vehicles(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Vehicle).order_by(Vehicle.id))
    vehicles = result.scalars().all()
    return [VehicleResponse.model_validate(v).model_dump() for v in vehicles]
