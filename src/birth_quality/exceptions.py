class BirthQualityException(Exception):
    """Base class for errors raised by the birth quality configuration layers."""
