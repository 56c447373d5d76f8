"""
domainkit: declarative domain-model metadata for Python codebases.

Classes are annotated with journeys, milestones, steps, stakeholders,
expectations, behaviors, tests, business logic, events and attributes. The
declarations are collected into queryable registries; nothing here executes
business logic.

- Registries and their container (`domainkit.registry`, `RegistrySet`)
- Declaration decorators (`domainkit.decorators`)
- Metadata records (`domainkit.types`)
- Identifier helpers (`domainkit.identity`)
- Settings (`domainkit.conf`) and tracing (`domainkit.tracing`)
- Unified exception hierarchy (`domainkit.exceptions`)

Import Guidelines:
------------------
- Build one `RegistrySet` per application (or per test) and pass it to
  every decorator as the first argument.
- Use `domainkit.exceptions` for standardized error handling.
"""

from importlib.metadata import PackageNotFoundError, version

from .conf import Settings
from .registry import RegistrySet

try:
    __version__ = version("domainkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "RegistrySet",
    "Settings",
]
