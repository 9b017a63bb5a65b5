"""Pydantic schemas for saved vehicles."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from vininfo.domain.schemas.auth import CamelModel


class VehicleCreate(CamelModel):
    vin: Optional[str] = None
    tp: Optional[str] = None
    orv: Optional[str] = None
    title: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    snapshot: Optional[Any] = None


class VehicleUpdate(CamelModel):
    title: Optional[str] = None


class VehicleRead(BaseModel):
    id: str
    vin: Optional[str] = None
    tp: Optional[str] = None
    orv: Optional[str] = None
    title: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    snapshot: Optional[Any] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "protected_namespaces": ()}
