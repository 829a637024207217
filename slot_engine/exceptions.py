from slot_engine.error_codes import ErrorCodes

class AppException(Exception):
    def __init__(self, error_code, status_message, status_code, details=None, action_button=None):
        super().__init__(status_message)
        self.error_code = error_code
        self.status_message = status_message
        self.status_code = status_code
        self.details = details if details is not None else {}
        self.action_button = action_button if action_button is not None else {}

class ValidationException(AppException):
    def __init__(self, status_message="Validation failed", details=None, action_button=None, error_code=ErrorCodes.VALIDATION_ERROR):
        super().__init__(
            error_code=error_code,
            status_message=status_message,
            status_code=422,
            details=details,
            action_button=action_button
        )

class SlotConfigurationException(AppException):
    """Raised by the HTTP layer when a submitted slot configuration breaks a structural rule."""
    def __init__(self, status_message="Invalid slot configuration", details=None, action_button=None):
        super().__init__(
            error_code=ErrorCodes.SLOT_CONFIG_ERROR,
            status_message=status_message,
            status_code=422,
            details=details,
            action_button=action_button
        )
