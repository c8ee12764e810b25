from sqlalchemy import Column, Integer, String

from gps_tracking.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_number = Column(String, nullable=False)
    vehicle_type = Column(String, nullable=False)
