"""
Service factory for the identity platform services.

Centralizes construction of the validator, the master data client and the
UI spec service so the application builds each of them once.
"""
import logging
from typing import Optional

from idplatform.core.config import settings
from idplatform.services.demographic_validator import DemographicValidator
from idplatform.services.masterdata_client import MasterDataClient
from idplatform.services.uispec_service import UISpecService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Factory for creating and caching service instances."""

    def __init__(self):
        self._demographic_validator: Optional[DemographicValidator] = None
        self._masterdata_client: Optional[MasterDataClient] = None
        self._uispec_service: Optional[UISpecService] = None

    @property
    def demographic_validator(self) -> DemographicValidator:
        """Get or create the demographic validator."""
        if self._demographic_validator is None:
            self._demographic_validator = DemographicValidator(date_pattern=settings.DATE_PATTERN)
            logger.info("Demographic validator initialized")
        return self._demographic_validator

    @property
    def masterdata_client(self) -> MasterDataClient:
        """
        Get or create the master data client.

        Raises:
            ClientConfigurationError: If MASTERDATA_BASE_URL is not set
        """
        if self._masterdata_client is None:
            self._masterdata_client = MasterDataClient(
                base_url=settings.MASTERDATA_BASE_URL,
                timeout=settings.MASTERDATA_TIMEOUT,
                max_attempts=settings.MASTERDATA_RETRY_ATTEMPTS
            )
            logger.info("Master data client initialized")
        return self._masterdata_client

    @property
    def uispec_service(self) -> UISpecService:
        """Get or create the UI spec service."""
        if self._uispec_service is None:
            self._uispec_service = UISpecService(
                client=self.masterdata_client,
                domain=settings.UI_SPEC_DOMAIN,
                version=settings.APP_VERSION
            )
            logger.info(f"UI spec service initialized for domain {settings.UI_SPEC_DOMAIN}")
        return self._uispec_service

    async def close(self) -> None:
        """Release the master data connection pool, if one was opened."""
        if self._masterdata_client is not None:
            await self._masterdata_client.close()


# Global factory instance
_service_factory: Optional[ServiceFactory] = None


def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance."""
    global _service_factory
    if _service_factory is None:
        _service_factory = ServiceFactory()
    return _service_factory
