from pydantic import BaseModel


class DriverResponse(BaseModel):
    id: int
    name: str | None = None
    vehicle_number: str | None = None
    phone: str | None = None
    status: str | None = None
    vehicle_type: str | None = None
    ktp_url: str | None = None
    sim_url: str | None = None

    model_config = {"from_attributes": True}
