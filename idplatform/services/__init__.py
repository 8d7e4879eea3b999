"""Services package for demographic validation, match strategies and UI spec management."""

from idplatform.services.demographic_validator import DemographicValidator
from idplatform.services.matching import MatchingStrategyType, GenderMatchingStrategy
from idplatform.services.masterdata_client import MasterDataClient
from idplatform.services.uispec_service import UISpecService
from idplatform.services.response_builder import ResponseBuilder

__all__ = [
    'DemographicValidator',
    'MatchingStrategyType',
    'GenderMatchingStrategy',
    'MasterDataClient',
    'UISpecService',
    'ResponseBuilder',
]
