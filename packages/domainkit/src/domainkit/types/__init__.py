"""Metadata records produced by declarations and stored by the registries."""

from .attributes import AttributeDefinition, AttributeValidation
from .base import BaseMetadata, SourceLocation
from .behaviors import BehaviorContract, BehaviorMetadata
from .enums import (
    BehaviorContractType,
    BehaviorExecutionMode,
    ContextRelationshipType,
    ExpectationPriority,
    LogicExecutionStrategy,
    LogicType,
    PersonaType,
    TestStatus,
    TestType,
)
from .events import DomainEventMetadata, EventHandlerMetadata
from .expectations import ExpectationMetadata, Scenario
from .journeys import (
    JourneyMetadata,
    JourneyReference,
    MilestoneMetadata,
    MilestoneReference,
    StakeholderInteraction,
    StepMetadata,
    StepReference,
)
from .logic import LogicExample, LogicMetadata, LogicReference
from .stakeholders import BoundedContextMetadata, PersonaMetadata, StakeholderMetadata
from .testcases import TestMetadata

__all__ = [
    "AttributeDefinition",
    "AttributeValidation",
    "BaseMetadata",
    "SourceLocation",
    "BehaviorContract",
    "BehaviorMetadata",
    "BehaviorContractType",
    "BehaviorExecutionMode",
    "ContextRelationshipType",
    "ExpectationPriority",
    "LogicExecutionStrategy",
    "LogicType",
    "PersonaType",
    "TestStatus",
    "TestType",
    "DomainEventMetadata",
    "EventHandlerMetadata",
    "ExpectationMetadata",
    "Scenario",
    "JourneyMetadata",
    "JourneyReference",
    "MilestoneMetadata",
    "MilestoneReference",
    "StakeholderInteraction",
    "StepMetadata",
    "StepReference",
    "LogicExample",
    "LogicMetadata",
    "LogicReference",
    "BoundedContextMetadata",
    "PersonaMetadata",
    "StakeholderMetadata",
    "TestMetadata",
]
