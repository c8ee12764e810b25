from sqlalchemy import Column, Integer, String, JSON

from gps_tracking.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    username = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)
    features = Column(JSON, nullable=True)
