"""
Response builder for UI spec operations.

Every UI spec operation answers with the same versioned envelope; this
module stamps the version and response time and fills in either the payload
or a single-entry error list.
"""
import logging
from datetime import datetime
from typing import Any, Optional

from idplatform.core.config import settings
from idplatform.core.error_handling import UISpecError
from idplatform.models.uispec_models import ErrorInfo, MainResponse

logger = logging.getLogger(__name__)


class ResponseBuilder:
    """Builds MainResponse envelopes."""

    def __init__(self, version: Optional[str] = None):
        self.version = version or settings.APP_VERSION

    def build_success(self, payload: Any) -> MainResponse:
        """Envelope carrying a payload and no errors."""
        return MainResponse(
            version=self.version,
            responsetime=self._now(),
            response=payload
        )

    def build_error(self, exc: UISpecError) -> MainResponse:
        """Envelope carrying the error code and message of a UISpecError."""
        error = ErrorInfo(error_code=exc.error_code, message=exc.message)
        logger.error(f"Exception {error.model_dump()}")
        return MainResponse(
            version=self.version,
            responsetime=self._now(),
            errors=[error]
        )

    @staticmethod
    def _now() -> str:
        return datetime.now().isoformat()
