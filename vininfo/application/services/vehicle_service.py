"""Vehicle service — saved registry lookups owned by a user."""

from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vininfo.core.exceptions import ConflictError, NotFoundError, ValidationError
from vininfo.domain.models.vehicle import TITLE_MAX_LENGTH, Vehicle
from vininfo.domain.schemas.vehicle import VehicleCreate, VehicleUpdate
from vininfo.infrastructure.repositories.vehicle_repository import SQLAlchemyVehicleRepository

logger = structlog.get_logger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_title(title: Optional[str]) -> Optional[str]:
    title = _clean(title)
    return title[:TITLE_MAX_LENGTH] if title else None


def list_vehicles(db: Session, user_id: str) -> List[Vehicle]:
    return SQLAlchemyVehicleRepository(db, Vehicle).list_for_user(user_id)


def save_vehicle(db: Session, user_id: str, body: VehicleCreate) -> Vehicle:
    vin = _clean(body.vin)
    vin = vin.upper() if vin else None
    tp = _clean(body.tp)
    orv = _clean(body.orv)
    if not (vin or tp or orv):
        raise ValidationError("Je nutné zadat VIN, číslo TP nebo číslo ORV")

    repo = SQLAlchemyVehicleRepository(db, Vehicle)
    if vin and repo.find_by_vin(user_id, vin):
        raise ConflictError("Vozidlo už máte uložené")

    try:
        vehicle = repo.create({
            "user_id": user_id,
            "vin": vin,
            "tp": tp,
            "orv": orv,
            "title": normalize_title(body.title),
            "brand": _clean(body.brand),
            "model": _clean(body.model),
            "snapshot": body.snapshot,
        })
    except IntegrityError:
        # Lost a race against a concurrent save of the same VIN
        db.rollback()
        raise ConflictError("Vozidlo už máte uložené")

    logger.info("Vehicle saved", vehicle_id=vehicle.id)
    return vehicle


def rename_vehicle(db: Session, user_id: str, vehicle_id: str, body: VehicleUpdate) -> Vehicle:
    if body.title is not None and len(body.title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Název může mít nejvýše {TITLE_MAX_LENGTH} znaků")

    repo = SQLAlchemyVehicleRepository(db, Vehicle)
    vehicle = repo.get_owned(vehicle_id, user_id)
    if vehicle is None:
        raise NotFoundError("Vozidlo nenalezeno")
    return repo.update(vehicle, {"title": normalize_title(body.title)})


def delete_vehicle(db: Session, user_id: str, vehicle_id: str) -> None:
    repo = SQLAlchemyVehicleRepository(db, Vehicle)
    vehicle = repo.get_owned(vehicle_id, user_id)
    if vehicle is None:
        raise NotFoundError("Vozidlo nenalezeno")
    repo.delete(vehicle.id)
    logger.info("Vehicle deleted", vehicle_id=vehicle_id)
