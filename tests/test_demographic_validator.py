"""
Unit tests for DemographicValidator.
"""
import unittest
from datetime import datetime, timedelta

from idplatform.core import constants
from idplatform.models.auth_models import AuthRequest
from idplatform.services.demographic_validator import DemographicValidator
from idplatform.services.matching import MatchingStrategyType


FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)

INVALID_INPUT_CODE = constants.INVALID_INPUT_PARAMETER[0]


def build_request(ad=False, fad=False, pi=True, personal=None, address=None, full_address=None):
    """Build an AuthRequest from wire-shaped dictionaries."""
    demo = {}
    if personal is not None:
        demo["pi"] = personal
    if address is not None:
        demo["ad"] = address
    if full_address is not None:
        demo["fad"] = full_address
    return AuthRequest.model_validate({
        "authType": {"ad": ad, "fad": fad, "pi": pi},
        "pii": {"demo": demo}
    })


class TestDemographicValidator(unittest.TestCase):
    """Test cases for the rule battery."""

    def setUp(self):
        self.validator = DemographicValidator(date_pattern="%Y-%m-%d", clock=lambda: FIXED_NOW)

    def assertRejectsAttribute(self, result, attribute):
        messages = [error.message for error in result.errors if error.code == INVALID_INPUT_CODE]
        self.assertIn(f"Invalid Input Parameter - {attribute}", messages)

    # ============================================================================
    # Guards
    # ============================================================================

    def test_missing_pii_is_valid(self):
        request = AuthRequest.model_validate({"authType": {"pi": True}})
        self.assertTrue(self.validator.validate(request).is_valid)

    def test_missing_auth_type_is_valid(self):
        request = AuthRequest.model_validate({"pii": {"demo": {"pi": {"age": 500}}}})
        self.assertTrue(self.validator.validate(request).is_valid)

    def test_personal_info_rules_skipped_when_flag_off(self):
        request = build_request(pi=False, personal={"age": 500, "gender": "X"})
        self.assertTrue(self.validator.validate(request).is_valid)

    def test_valid_request(self):
        request = build_request(personal={
            "namePri": "Jane Doe",
            "age": 34,
            "dob": "1990-01-31",
            "gender": "F",
            "phone": "9876543210",
            "email": "jane.doe@example.com",
            "msPri": "E",
            "msSec": "PH",
            "mtPri": 100,
            "mtSec": 1
        })
        result = self.validator.validate(request)
        self.assertTrue(result.is_valid, result.errors)

    # ============================================================================
    # Address rules
    # ============================================================================

    def test_address_and_full_address_are_mutually_exclusive(self):
        for address in (None, {}, {"cityPri": "Bengaluru"}):
            request = build_request(ad=True, fad=True, pi=False, address=address,
                                    full_address={"addrPri": "1 Main St"})
            result = self.validator.validate(request)
            self.assertEqual(result.codes, [constants.AD_FAD_MUTUALLY_EXCLUSIVE[0]])
            self.assertIsNone(result.errors[0].field)

    def test_full_address_requires_one_attribute(self):
        request = build_request(fad=True, pi=False, full_address={})
        result = self.validator.validate(request)
        self.assertEqual(result.codes, [constants.INVALID_FULL_ADDRESS_REQUEST[0]])

    def test_full_address_with_secondary_text_is_valid(self):
        request = build_request(fad=True, pi=False, full_address={"addrSec": "ಬೆಂಗಳೂರು"})
        self.assertTrue(self.validator.validate(request).is_valid)

    def test_address_requires_one_attribute(self):
        request = build_request(ad=True, pi=False, address={})
        result = self.validator.validate(request)
        self.assertEqual(result.codes, [constants.INVALID_ADDRESS_REQUEST[0]])

    def test_address_missing_record_is_rejected(self):
        request = build_request(ad=True, pi=False)
        result = self.validator.validate(request)
        self.assertEqual(result.codes, [constants.INVALID_ADDRESS_REQUEST[0]])

    def test_address_single_secondary_attribute_is_valid(self):
        request = build_request(ad=True, pi=False, address={"pinCodeSec": "560001"})
        self.assertTrue(self.validator.validate(request).is_valid)

    # ============================================================================
    # Personal info rules
    # ============================================================================

    def test_all_personal_info_null_is_rejected(self):
        request = build_request(personal={"msPri": "E"})
        result = self.validator.validate(request)
        self.assertEqual(result.codes, [constants.INVALID_PERSONAL_INFORMATION[0]])

    def test_age_bounds(self):
        for age, valid in ((-1, False), (0, True), (75, True), (150, True), (151, False)):
            with self.subTest(age=age):
                result = self.validator.validate(build_request(personal={"age": age}))
                self.assertEqual(result.is_valid, valid)
                if not valid:
                    self.assertRejectsAttribute(result, "age")
                    self.assertEqual(result.errors[0].field, "pii")

    def test_gender_values(self):
        for gender, valid in (("M", True), ("F", True), ("T", True), ("m", False), ("X", False), ("", False)):
            with self.subTest(gender=gender):
                result = self.validator.validate(build_request(personal={"gender": gender}))
                self.assertEqual(result.is_valid, valid)

    def test_empty_phone_is_rejected(self):
        result = self.validator.validate(build_request(personal={"namePri": "A", "phone": ""}))
        self.assertRejectsAttribute(result, "phone")

    def test_phone_format_is_not_checked(self):
        result = self.validator.validate(build_request(personal={"phone": "not a number"}))
        self.assertTrue(result.is_valid)

    def test_email_pattern(self):
        self.assertTrue(self.validator.validate(build_request(personal={"email": "a.b@example.co"})).is_valid)
        result = self.validator.validate(build_request(personal={"email": "not-an-email"}))
        self.assertRejectsAttribute(result, "email")

    def test_email_single_letter_tld_is_rejected(self):
        result = self.validator.validate(build_request(personal={"email": "a@example.c"}))
        self.assertFalse(result.is_valid)

    def test_match_strategy_values(self):
        for strategy, valid in (("E", True), ("P", True), ("PH", True), ("X", False), ("e", False)):
            with self.subTest(strategy=strategy):
                result = self.validator.validate(
                    build_request(personal={"namePri": "A", "msPri": strategy, "msSec": strategy})
                )
                self.assertEqual(result.is_valid, valid)
                if not valid:
                    self.assertRejectsAttribute(result, "msPri")
                    self.assertRejectsAttribute(result, "msSec")

    def test_every_strategy_type_code_is_accepted(self):
        for strategy in MatchingStrategyType:
            with self.subTest(strategy=strategy):
                result = self.validator.validate(build_request(personal={"namePri": "A", "msPri": strategy.value}))
                self.assertTrue(result.is_valid)

    def test_rejected_strategy_is_reported_on_pii(self):
        result = self.validator.validate(build_request(personal={"namePri": "A", "msSec": "EX"}))
        self.assertEqual(len(result), 1)
        self.assertEqual(result.errors[0].field, "pii")
        self.assertRejectsAttribute(result, "msSec")

    def test_match_threshold_bounds(self):
        for threshold, valid in ((0, False), (1, True), (50, True), (100, True), (101, False)):
            with self.subTest(threshold=threshold):
                result = self.validator.validate(build_request(personal={"namePri": "A", "mtSec": threshold}))
                self.assertEqual(result.is_valid, valid)
                if not valid:
                    self.assertRejectsAttribute(result, "mtSec")

    # ============================================================================
    # Date of birth
    # ============================================================================

    def test_dob_in_future_is_rejected(self):
        result = self.validator.validate(build_request(personal={"dob": "2024-06-16"}))
        self.assertRejectsAttribute(result, "dob")
        # Reported without a field, unlike a dob that fails to parse
        self.assertEqual(len(result), 1)
        self.assertIsNone(result.errors[0].field)

    def test_dob_equal_to_now_is_accepted(self):
        validator = DemographicValidator(
            date_pattern="%Y-%m-%dT%H:%M:%S",
            clock=lambda: FIXED_NOW
        )
        result = validator.validate(build_request(personal={"dob": "2024-06-15T12:00:00"}))
        self.assertTrue(result.is_valid)

    def test_dob_one_second_after_now_is_rejected(self):
        validator = DemographicValidator(
            date_pattern="%Y-%m-%dT%H:%M:%S",
            clock=lambda: FIXED_NOW
        )
        later = (FIXED_NOW + timedelta(seconds=1)).strftime("%Y-%m-%dT%H:%M:%S")
        result = validator.validate(build_request(personal={"dob": later}))
        self.assertFalse(result.is_valid)

    def test_malformed_dob_is_invalid_input(self):
        result = self.validator.validate(build_request(personal={"dob": "31/01/1990"}))
        self.assertEqual(len(result), 1)
        self.assertEqual(result.errors[0].field, "pii")
        self.assertRejectsAttribute(result, "dob")

    def test_dob_with_timezone_against_real_clock(self):
        validator = DemographicValidator(date_pattern="%Y-%m-%dT%H:%M:%S%z")
        self.assertTrue(validator.validate(build_request(personal={"dob": "1990-01-31T00:00:00+0530"})).is_valid)
        self.assertFalse(validator.validate(build_request(personal={"dob": "2999-01-31T00:00:00+0000"})).is_valid)

    def test_default_pattern_comes_from_settings(self):
        from idplatform.core.config import settings
        self.assertEqual(DemographicValidator().date_pattern, settings.DATE_PATTERN)

    # ============================================================================
    # No short-circuit
    # ============================================================================

    def test_all_failures_are_accumulated(self):
        request = build_request(
            ad=True,
            fad=True,
            personal={
                "age": 200,
                "dob": "bad",
                "gender": "Z",
                "phone": "",
                "email": "nope",
                "msPri": "Q",
                "mtPri": 0
            }
        )
        result = self.validator.validate(request)
        self.assertEqual(result.codes[0], constants.AD_FAD_MUTUALLY_EXCLUSIVE[0])
        for attribute in ("dob", "age", "gender", "phone", "email", "msPri", "mtPri"):
            self.assertRejectsAttribute(result, attribute)
        self.assertEqual(len(result), 8)


if __name__ == "__main__":
    unittest.main()
