from sqlalchemy import Column, Integer, String

from gps_tracking.database import Base


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=True)
    vehicle_number = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    status = Column(String, nullable=True)
    vehicle_type = Column(String, nullable=True, index=True)
    ktp_url = Column(String, nullable=True)
    sim_url = Column(String, nullable=True)
