"""
Custom exceptions for the SnapRoute itinerary engine
"""

class SnapRouteError(Exception):
    """Base exception for the SnapRoute itinerary engine"""
    pass


class InvalidCoordinatesError(SnapRouteError):
    """Raised when coordinates are invalid or out of bounds"""
    pass


class InvalidFeatureError(SnapRouteError):
    """Raised when a transit line or stop feature is malformed"""
    pass


class InvalidRouteError(SnapRouteError):
    """Raised when the supplied driving route is missing geometry or summary"""
    pass


class NetworkLoadError(SnapRouteError):
    """Raised when the transit network file cannot be read"""
    pass


class WalkingRouteError(SnapRouteError):
    """Raised when the external walking route service fails"""
    pass
