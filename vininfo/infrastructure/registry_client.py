"""Vehicle registry HTTP client — opaque lookup by VIN, TP or ORV."""

from typing import Optional

import httpx
import structlog

from vininfo.config import Settings, get_settings
from vininfo.core.exceptions import ConfigError, NotFoundError, TransientProviderError, ValidationError

logger = structlog.get_logger(__name__)

LOOKUP_KEYS = ("vin", "tp", "orv")


class RegistryClient:
    """Thin proxy to the external Czech vehicle registry API."""

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.REGISTRY_API_URL
        self.api_key = self.settings.REGISTRY_API_KEY
        self._transport = transport

    async def lookup(self, vin: Optional[str] = None, tp: Optional[str] = None, orv: Optional[str] = None) -> dict:
        """Return the registry JSON for the first identifier supplied (vin, then tp, then orv)."""
        values = {"vin": vin, "tp": tp, "orv": orv}
        key = next((k for k in LOOKUP_KEYS if values[k]), None)
        if key is None:
            raise ValidationError("Zadejte VIN, číslo TP nebo číslo ORV")

        if not self.api_key or not self.base_url:
            raise ConfigError("Vehicle registry API is not configured")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self.base_url,
                    params={key: values[key].strip()},
                    headers={"api_key": self.api_key},
                )
        except httpx.HTTPError as e:
            logger.warning("Registry connection error", lookup=key, error=str(e))
            raise TransientProviderError("Registr vozidel je nedostupný")

        if response.status_code == 404:
            raise NotFoundError("Vozidlo nebylo v registru nalezeno")
        if not response.is_success:
            logger.warning("Registry API error", lookup=key, status_code=response.status_code)
            raise TransientProviderError(
                "Registr vozidel je nedostupný", {"upstream_status": response.status_code}
            )

        try:
            return response.json()
        except ValueError:
            raise TransientProviderError("Registr vozidel vrátil neplatnou odpověď")
