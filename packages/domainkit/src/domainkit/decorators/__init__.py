# domainkit/decorators/__init__.py
"""Decorator facade.

Every decorator is a module-level instance of a ``BaseDecorator`` subclass and
takes the ``RegistrySet`` to write into as its first argument.
"""

from .base import BaseDecorator
from .components import *

__all__ = [
    "BaseDecorator",
    "milestone",
    "step",
    "journey",
    "logic",
    "rule",
    "policy",
    "specification",
    "domain_event",
    "event_handler",
    "attribute",
    "persona",
    "stakeholder",
    "bounded_context",
    "behavior",
    "expectation",
    "test_case",
]
