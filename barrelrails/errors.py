"""Exceptions raised by barrelrails."""


class BarrelrailsError(Exception):
    """Base class for barrelrails errors."""


class ConfigError(BarrelrailsError):
    """Unreadable or invalid configuration, or a missing scan root."""
