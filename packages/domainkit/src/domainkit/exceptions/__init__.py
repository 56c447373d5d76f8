from .base import DomainKitError, MetadataValidationError, SettingsError
from .registry_exceptions import (
    LogicTypeConflictError,
    MissingFieldError,
    RegistryConfigurationError,
    RegistryError,
    RegistryLookupError,
    StepOrderConflictError,
    UnresolvedReferenceError,
)

__all__ = [
    "DomainKitError",
    "MetadataValidationError",
    "SettingsError",
    "RegistryError",
    "RegistryLookupError",
    "RegistryConfigurationError",
    "MissingFieldError",
    "StepOrderConflictError",
    "LogicTypeConflictError",
    "UnresolvedReferenceError",
]
