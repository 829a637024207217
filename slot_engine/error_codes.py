class ErrorCodes:
    """String error codes returned in API error payloads."""
    GENERIC_ERROR = "GENERIC_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_BET = "INVALID_BET"
    SLOT_CONFIG_ERROR = "SLOT_CONFIG_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ConfigRules:
    """Names of the structural rules checked by the slot config validator, in check order."""
    MALFORMED_CONFIG = "MALFORMED_CONFIG"
    MISSING_ID = "MISSING_ID"
    MISSING_NAME = "MISSING_NAME"
    INVALID_ROWS = "INVALID_ROWS"
    INVALID_COLUMNS = "INVALID_COLUMNS"
    NO_SYMBOLS = "NO_SYMBOLS"
    INVALID_SYMBOL = "INVALID_SYMBOL"
    UNKNOWN_WEIGHT_SYMBOL = "UNKNOWN_WEIGHT_SYMBOL"
    INVALID_SYMBOL_WEIGHT = "INVALID_SYMBOL_WEIGHT"
    NO_PAYLINES = "NO_PAYLINES"
    INVALID_PAYLINE_ID = "INVALID_PAYLINE_ID"
    PAYLINE_LENGTH_MISMATCH = "PAYLINE_LENGTH_MISMATCH"
    PAYLINE_POSITION_OUT_OF_BOUNDS = "PAYLINE_POSITION_OUT_OF_BOUNDS"
    NO_BET_OPTIONS = "NO_BET_OPTIONS"
    INVALID_MIN_BET = "INVALID_MIN_BET"
    INVALID_MAX_BET = "INVALID_MAX_BET"
    INVALID_RTP = "INVALID_RTP"
