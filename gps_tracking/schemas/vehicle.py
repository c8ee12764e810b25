from pydantic import BaseModel


class VehicleResponse(BaseModel):
    id: int
    vehicle_number: str
    vehicle_type: str

    model_config = {"from_attributes": True}
