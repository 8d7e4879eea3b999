"""
Demographic validator for authentication requests.

Applies a fixed battery of field-level checks to the demographic part of an
authentication request and accumulates every failure. Rules are independent:
a failing rule never prevents the others from running.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

from idplatform.core.config import settings
from idplatform.core import constants
from idplatform.core.error_handling import error_code_of
from idplatform.models.auth_models import (
    AuthRequest,
    AuthType,
    Demo,
    PersonalIdentity,
    is_all_none,
)
from idplatform.models.validation_models import ValidationResult
from idplatform.services.matching import MatchingStrategyType

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(constants.EMAIL_PATTERN)

# Attributes of which at least one must be present for personal info auth
_PERSONAL_INFO_ATTRIBUTES = ("name_pri", "name_sec", "age", "dob", "email", "gender", "phone")


class DemographicValidator:
    """Validates demographic info of an individual.

    Args:
        date_pattern: strptime pattern for the date of birth
            (defaults to settings.DATE_PATTERN)
        clock: callable returning the current time, used for the
            future date-of-birth check
    """

    def __init__(
        self,
        date_pattern: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.date_pattern = date_pattern or settings.DATE_PATTERN
        self._clock = clock

    def validate(self, request: AuthRequest) -> ValidationResult:
        """Run every applicable rule and return the accumulated failures."""
        result = ValidationResult()
        demo = request.demo()

        if demo is None or request.auth_type is None:
            return result

        self._validate_address(request.auth_type, demo, result)
        self._validate_personal_info(request.auth_type, demo.pi, result)

        if not result.is_valid:
            logger.info(f"Demographic validation failed with codes {result.codes}")
        return result

    # ------------------------------------------------------------------
    # Address rules
    # ------------------------------------------------------------------

    def _validate_address(self, auth_type: AuthType, demo: Demo, result: ValidationResult) -> None:
        if auth_type.ad and auth_type.fad:
            logger.error("Address and Full address are mutually exclusive")
            result.add(None, *constants.AD_FAD_MUTUALLY_EXCLUSIVE)
        elif auth_type.fad:
            full_address = demo.fad
            if full_address is not None and is_all_none(full_address, "addr_pri", "addr_sec"):
                logger.error("At least one attribute of full address should be present")
                result.add(None, *constants.INVALID_FULL_ADDRESS_REQUEST)
        elif auth_type.ad:
            if demo.ad is None or demo.ad.is_empty():
                logger.error("At least one attribute of address should be present")
                result.add(None, *constants.INVALID_ADDRESS_REQUEST)

    # ------------------------------------------------------------------
    # Personal info rules
    # ------------------------------------------------------------------

    def _validate_personal_info(
        self,
        auth_type: AuthType,
        pi: Optional[PersonalIdentity],
        result: ValidationResult
    ) -> None:
        if not auth_type.pi or pi is None:
            return

        if is_all_none(pi, *_PERSONAL_INFO_ATTRIBUTES):
            logger.error("At least one valid personal info should be present")
            result.add(None, *constants.INVALID_PERSONAL_INFORMATION)

        if pi.dob is not None:
            self._check_dob(pi.dob, result)
        if pi.age is not None:
            self._check_range(pi.age, constants.MIN_AGE, constants.MAX_AGE, "age", result)
        if pi.gender is not None:
            self._check_choice(pi.gender, constants.VALID_GENDERS, "gender", result)
        if pi.phone is not None and not pi.phone:
            _reject_input(result, "phone")
        if pi.email is not None and not _EMAIL_RE.match(pi.email):
            _reject_input(result, "email")

        for value, name in ((pi.ms_pri, "msPri"), (pi.ms_sec, "msSec")):
            if value is not None:
                self._check_strategy(value, name, result)
        for value, name in ((pi.mt_pri, "mtPri"), (pi.mt_sec, "mtSec")):
            if value is not None:
                self._check_range(
                    value, constants.MIN_MATCH_THRESHOLD, constants.MAX_MATCH_THRESHOLD, name, result
                )

    def _check_dob(self, dob: str, result: ValidationResult) -> None:
        try:
            parsed = datetime.strptime(dob, self.date_pattern)
        except ValueError:
            logger.error(f"Could not parse dob with pattern {self.date_pattern!r}")
            _reject_input(result, "dob")
            return

        if parsed > self._now(parsed):
            # A future date is an object-level rejection, unlike a parse failure
            _reject_input(result, "dob", field_name=None)

    def _now(self, reference: datetime) -> datetime:
        # Compare aware with aware and naive with naive
        if self._clock is not None:
            now = self._clock()
        elif reference.tzinfo is not None:
            now = datetime.now(timezone.utc)
        else:
            now = datetime.now()

        if reference.tzinfo is not None and now.tzinfo is None:
            return now.astimezone()
        if reference.tzinfo is None and now.tzinfo is not None:
            return now.astimezone().replace(tzinfo=None)
        return now

    @staticmethod
    def _check_range(value: int, low: int, high: int, name: str, result: ValidationResult) -> None:
        if value < low or value > high:
            _reject_input(result, name)

    @staticmethod
    def _check_strategy(value: str, name: str, result: ValidationResult) -> None:
        try:
            MatchingStrategyType.from_code(value)
        except ValueError:
            _reject_input(result, name)

    @staticmethod
    def _check_choice(value: str, allowed: tuple, name: str, result: ValidationResult) -> None:
        if value not in allowed:
            _reject_input(result, name)


def _reject_input(
    result: ValidationResult,
    attribute: str,
    field_name: Optional[str] = constants.PII_FIELD
) -> None:
    result.add(field_name, *error_code_of(constants.INVALID_INPUT_PARAMETER, attribute))
