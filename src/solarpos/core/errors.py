class SolarposError(Exception):
    """Base error."""

class DomainError(SolarposError, ValueError):
    """Raised when latitude or longitude lie outside their legal ranges."""


def check_lat_lon(latitude: float, longitude: float) -> None:
    """Fail fast on out-of-range (or NaN) coordinates. Never clamps."""
    if not (-90.0 <= latitude <= 90.0):
        raise DomainError(f"latitude out of range [-90, 90]: {latitude}")
    if not (-180.0 <= longitude <= 180.0):
        raise DomainError(f"longitude out of range [-180, 180]: {longitude}")
