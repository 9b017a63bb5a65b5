"""
Vehicle Repository Interface.
"""

from typing import List, Optional

from vininfo.domain.repositories.base import BaseRepository
from vininfo.domain.models.vehicle import Vehicle


class VehicleRepository(BaseRepository[Vehicle]):
    """Interface for Vehicle-specific operations. Every lookup is scoped by owner."""

    def list_for_user(self, user_id: str) -> List[Vehicle]:
        ...

    def get_owned(self, vehicle_id: str, user_id: str) -> Optional[Vehicle]:
        ...

    def find_by_vin(self, user_id: str, vin: str) -> Optional[Vehicle]:
        ...
