# domainkit/exceptions/base.py


class DomainKitError(Exception):
    """Base for all domainkit exceptions."""


# ----------------------------------------------------------------------------
# Declaration errors
# ----------------------------------------------------------------------------
class MetadataValidationError(DomainKitError, ValueError):
    """Raised when a declaration cannot be normalised into a metadata record."""


# ----------------------------------------------------------------------------
# Configuration errors
# ----------------------------------------------------------------------------
class SettingsError(DomainKitError, ValueError):
    """Raised when a known setting is given a value of the wrong shape."""
