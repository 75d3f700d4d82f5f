"""Typed failures raised by the alert collaborators"""


class AlertError(Exception):
    """Base class for personal alert failures"""


class LocationError(AlertError):
    """Current position could not be resolved"""


class PermissionDenied(LocationError):
    """User has not granted access to the current position"""


class PositionUnavailable(LocationError):
    """No position capability on this host"""


class PositionTimeout(LocationError):
    """No position fix arrived in time"""


class LookupFailure(AlertError):
    """Index lookup for a coordinate failed"""


class GeocodeFailure(AlertError):
    """Reverse geocoding for a coordinate failed"""


class EnumerationFailure(AlertError):
    """Saved locations could not be listed"""


class UnsupportedPollutant(AlertError, ValueError):
    """Classifier was given a pollutant it has no breakpoints for"""

    def __init__(self, pollutant):
        super().__init__(f"No index breakpoints for pollutant: {pollutant!r}")
        self.pollutant = pollutant
