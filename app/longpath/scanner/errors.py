"""Exceptions raised by the traversal engine and scan controller."""


class ScanError(Exception):
    """Base exception for scan errors."""


class InvalidRootError(ScanError):
    """Raised when the scan root does not exist or is not a directory."""


class InvalidThresholdError(ScanError):
    """Raised when the length threshold is negative."""


class ScanInProgressError(ScanError):
    """Raised when starting a scan while another one is still running."""


class RootUnreadableError(ScanError):
    """Raised when the scan root itself cannot be listed."""


class LengthComputationError(ScanError):
    """Raised when the length of a listed path cannot be computed."""
