"""Custom exception hierarchy for Trackboard."""


class TrackboardError(Exception):
    """Base exception for all Trackboard errors."""


class ConfigurationError(TrackboardError):
    """Raised when settings are invalid or missing."""


class TemplateLoadError(TrackboardError):
    """Raised when a static page resource cannot be read."""
