"""
SQLAlchemy Implementation of Vehicle Repository.
"""

from typing import List, Optional

from vininfo.domain.models.vehicle import Vehicle
from vininfo.domain.repositories.vehicle_repository import VehicleRepository
from vininfo.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyVehicleRepository(SQLAlchemyRepository[Vehicle], VehicleRepository):
    """Vehicle repository implementation using SQLAlchemy."""

    def list_for_user(self, user_id: str) -> List[Vehicle]:
        return (
            self.db.query(Vehicle)
            .filter(Vehicle.user_id == user_id)
            .order_by(Vehicle.created_at.desc())
            .all()
        )

    def get_owned(self, vehicle_id: str, user_id: str) -> Optional[Vehicle]:
        return (
            self.db.query(Vehicle)
            .filter(Vehicle.id == vehicle_id, Vehicle.user_id == user_id)
            .first()
        )

    def find_by_vin(self, user_id: str, vin: str) -> Optional[Vehicle]:
        return (
            self.db.query(Vehicle)
            .filter(Vehicle.user_id == user_id, Vehicle.vin == vin)
            .first()
        )
