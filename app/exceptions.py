"""
Error types raised by the playlist proxy.

Authorization failures are not exceptions; the access gate returns a boolean.
"""


class PlaylistProxyError(Exception):
    """Base class for playlist proxy errors"""
    pass


class ConfigurationError(PlaylistProxyError):
    """Raised when a required setting (the source playlist URL) is missing"""
    pass


class FetchError(PlaylistProxyError):
    """Raised when the upstream playlist cannot be retrieved"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
