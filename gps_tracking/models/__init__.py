from gps_tracking.models.company import Company
from gps_tracking.models.user import User
from gps_tracking.models.driver import Driver
from gps_tracking.models.vehicle import Vehicle

__all__ = ["Company", "User", "Driver", "Vehicle"]
