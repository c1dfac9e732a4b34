class SkyClockError(Exception):
    """Base exception for SkyClock errors."""


class CatalogError(SkyClockError):
    """Raised for missing or malformed catalog data."""


class ConfigError(SkyClockError):
    """Raised for invalid configuration values."""
