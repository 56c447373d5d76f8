# domainkit/exceptions/registry_exceptions.py
"""Registry exceptions"""
from domainkit.exceptions.base import DomainKitError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(DomainKitError): ...


class RegistryLookupError(RegistryError, LookupError): ...


class RegistryConfigurationError(RegistryError):
    """An authored mistake surfaced at registration time; aborts the call."""


class MissingFieldError(RegistryConfigurationError): ...


class StepOrderConflictError(RegistryConfigurationError): ...


class LogicTypeConflictError(RegistryConfigurationError): ...


class UnresolvedReferenceError(RegistryConfigurationError): ...
