"""Saved vehicles API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vininfo.application.services.vehicle_service import (
    delete_vehicle,
    list_vehicles,
    rename_vehicle,
    save_vehicle,
)
from vininfo.domain.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from vininfo.infrastructure.database import get_db
from vininfo.interfaces.api.deps import get_current_user_id

router = APIRouter(prefix="/api/client/vehicles", tags=["Vehicles"])


@router.get("")
def get_vehicles(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return {"vehicles": [VehicleRead.model_validate(v) for v in list_vehicles(db, user_id)]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_vehicle(
    body: VehicleCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"vehicle": VehicleRead.model_validate(save_vehicle(db, user_id, body))}


@router.patch("/{vehicle_id}")
def update_vehicle(
    vehicle_id: str,
    body: VehicleUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"vehicle": VehicleRead.model_validate(rename_vehicle(db, user_id, vehicle_id, body))}


@router.delete("/{vehicle_id}")
def remove_vehicle(
    vehicle_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    delete_vehicle(db, user_id, vehicle_id)
    return {"success": True}
