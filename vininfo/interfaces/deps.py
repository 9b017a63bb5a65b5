"""
API Dependencies — service and client providers.
"""

from fastapi import Depends

from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings, get_settings
from vininfo.infrastructure.email_client import EmailClient
from vininfo.infrastructure.registry_client import RegistryClient


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_email_client(settings: Settings = Depends(get_settings)) -> EmailClient:
    return EmailClient(settings)


def get_registry_client(settings: Settings = Depends(get_settings)) -> RegistryClient:
    return RegistryClient(settings)
