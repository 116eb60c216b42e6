# FILE: snapcode/errors.py
"""
Error types surfaced by the snapcode backend
"""


class SnapcodeError(Exception):
    """Base class for snapcode errors"""

    status_code = 500


class ModelConfigurationError(SnapcodeError):
    """Required model configuration (API key) is missing"""

    status_code = 500


class ModelServiceError(SnapcodeError):
    """The upstream model service failed or rejected the request"""

    status_code = 502

    def __init__(self, message: str, upstream_status: int = None):
        super().__init__(message)
        self.upstream_status = upstream_status
