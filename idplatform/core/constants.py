"""
Shared constants for demographic validation and UI spec handling.

Error codes are kept in one place so validators, services and tests
reference the same values.
"""

# Demographic validation limits
MIN_AGE = 0
MAX_AGE = 150
MIN_MATCH_THRESHOLD = 1
MAX_MATCH_THRESHOLD = 100

VALID_GENDERS = ("M", "F", "T")

EMAIL_PATTERN = (
    r"^[_A-Za-z0-9\-+]+(\.[_A-Za-z0-9-]+)*@[A-Za-z0-9-]+"
    r"(\.[A-Za-z0-9]+)*(\.[A-Za-z]{2,})$"
)

# Demographic validation error codes: (code, message)
AD_FAD_MUTUALLY_EXCLUSIVE = ("IDA-DEA-001", "Address and full address are mutually exclusive")
INVALID_FULL_ADDRESS_REQUEST = ("IDA-DEA-002", "At least one attribute of full address should be present")
INVALID_ADDRESS_REQUEST = ("IDA-DEA-003", "At least one attribute of address should be present")
INVALID_PERSONAL_INFORMATION = ("IDA-DEA-004", "At least one valid personal information attribute should be present")
INVALID_INPUT_PARAMETER = ("IDA-MLC-009", "Invalid Input Parameter - {}")

# Field identifier used for rejections inside personal info
PII_FIELD = "pii"

# identitySchemaVersion selector meaning "latest published"
LATEST_ID_SCHEMA_VERSION = 0

# UI spec service error codes
MASTERDATA_UNAVAILABLE = ("PRG_APP_UIS_001", "Master data service is unavailable")
MASTERDATA_INVALID_RESPONSE = ("PRG_APP_UIS_002", "Invalid response from master data service")
MASTERDATA_NOT_CONFIGURED = ("PRG_APP_UIS_003", "Master data base URL is not configured")
