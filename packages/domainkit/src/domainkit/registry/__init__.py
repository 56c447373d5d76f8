# domainkit/registry/__init__.py
from .attributes import AttributeRegistry
from .base import BaseRegistry
from .behaviors import BehaviorEntry, BehaviorRegistry
from .contexts import BoundedContextEntry, BoundedContextRegistry
from .events import EventEntry, EventRegistry, HandlerEntry
from .expectations import ContextValidation, ExpectationEntry, ExpectationRegistry
from .journeys import JourneyEntry, JourneyRegistry
from .logic import LogicEntry, LogicRegistry
from .milestones import MilestoneEntry, MilestoneRegistry
from .records import RegistryEntry, Resolved, ResolutionState, StepEntry, TestEntry, Unresolved
from .registry_set import RegistrySet
from .stakeholders import PersonaEntry, PersonaRegistry, StakeholderEntry, StakeholderRegistry
from .steps import StepRegistry, StepRegistryEntry
from .testcases import TestRegistry, TestRegistryEntry

__all__ = [
    "BaseRegistry",
    "RegistrySet",
    # records
    "RegistryEntry",
    "StepEntry",
    "TestEntry",
    "Unresolved",
    "Resolved",
    "ResolutionState",
    # registries
    "MilestoneRegistry",
    "MilestoneEntry",
    "StepRegistry",
    "StepRegistryEntry",
    "LogicRegistry",
    "LogicEntry",
    "EventRegistry",
    "EventEntry",
    "HandlerEntry",
    "AttributeRegistry",
    "TestRegistry",
    "TestRegistryEntry",
    "ExpectationRegistry",
    "ExpectationEntry",
    "ContextValidation",
    "BehaviorRegistry",
    "BehaviorEntry",
    "JourneyRegistry",
    "JourneyEntry",
    "PersonaRegistry",
    "PersonaEntry",
    "StakeholderRegistry",
    "StakeholderEntry",
    "BoundedContextRegistry",
    "BoundedContextEntry",
]
