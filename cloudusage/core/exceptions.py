from typing import Optional, Dict, Any

class CloudUsageException(Exception):
    """Base exception for all cloudusage errors."""
    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

class UsageRowError(CloudUsageException):
    """
    Raised when a billing row violates the upstream data contract
    (missing required field, unparseable amount or timestamp).
    """
    def __init__(self, message: str, code: str = "invalid_usage_row", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)

class ConfigurationError(CloudUsageException):
    """Raised when application configuration is invalid or missing."""
    def __init__(self, message: str, code: str = "config_error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)
