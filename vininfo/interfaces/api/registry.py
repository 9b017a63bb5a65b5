"""Vehicle registry lookup route — public, proxied to the registry API."""

from typing import Optional

from fastapi import APIRouter, Depends

from vininfo.infrastructure.registry_client import RegistryClient
from vininfo.interfaces.deps import get_registry_client

router = APIRouter(prefix="/api/vehicle", tags=["Registry"])


@router.get("")
async def lookup_vehicle(
    vin: Optional[str] = None,
    tp: Optional[str] = None,
    orv: Optional[str] = None,
    registry: RegistryClient = Depends(get_registry_client),
):
    return await registry.lookup(vin=vin, tp=tp, orv=orv)
