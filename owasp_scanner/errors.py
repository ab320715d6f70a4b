"""Exception types shared across the scanner."""


class ScannerError(Exception):
    """Base class for scanner errors."""


class ConfigurationError(ScannerError, ValueError):
    """Raised for a missing scan path or an unreadable/invalid config file."""


class DiscoveryError(ScannerError, OSError):
    """Raised when a directory or file cannot be read during the walk."""


class RuleApplicationError(ScannerError, RuntimeError):
    """Wraps a malformed pattern or a failing custom check."""

    def __init__(self, rule_id: str, path: str, cause: BaseException) -> None:
        super().__init__(f"Error applying rule {rule_id} to {path}: {cause}")
        self.rule_id = rule_id
        self.path = path
        self.cause = cause


class RenderError(ScannerError, OSError):
    """Raised when a rendered report cannot be written."""


class SubmissionError(ScannerError, RuntimeError):
    """Raised when the reporting backend cannot be reached or rejects a scan."""


class ScanCancelled(ScannerError, RuntimeError):
    """Raised when a scan is aborted through its cancel token."""
