# domainkit/types/enums.py
from enum import Enum

__all__ = [
    "LogicType",
    "TestType",
    "TestStatus",
    "ExpectationPriority",
    "PersonaType",
    "ContextRelationshipType",
    "BehaviorContractType",
    "BehaviorExecutionMode",
    "LogicExecutionStrategy",
]


class LogicType(str, Enum):
    SPECIFICATION = "specification"
    POLICY = "policy"
    RULE = "rule"
    BEHAVIOR = "behavior"
    CALCULATION = "calculation"
    TRANSFORMATION = "transformation"
    VALIDATION = "validation"
    ORCHESTRATION = "orchestration"
    QUERY = "query"
    COMMAND = "command"
    EVENT_HANDLER = "event-handler"


class LogicExecutionStrategy(str, Enum):
    SEQUENCE = "sequence"
    PARALLEL = "parallel"
    CONDITIONAL = "conditional"


class TestType(str, Enum):
    __test__ = False  # not a pytest test class

    UNIT = "unit"
    INTEGRATION = "integration"
    E2E = "e2e"
    CONTRACT = "contract"
    PERFORMANCE = "performance"
    SECURITY = "security"


class TestStatus(str, Enum):
    __test__ = False

    PENDING = "pending"
    PASSING = "passing"
    FAILING = "failing"
    SKIPPED = "skipped"
    FLAKY = "flaky"


class ExpectationPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PersonaType(str, Enum):
    HUMAN = "human"
    ORGANIZATION = "organization"
    GROUP = "group"
    SYSTEM = "system"


class ContextRelationshipType(str, Enum):
    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"
    PARTNERSHIP = "partnership"
    CUSTOMER_SUPPLIER = "customer-supplier"


class BehaviorContractType(str, Enum):
    SYNC = "sync"
    ASYNC = "async"
    EVENT_DRIVEN = "event-driven"
    BATCH = "batch"


class BehaviorExecutionMode(str, Enum):
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    SCHEDULED = "scheduled"
    CONDITIONAL = "conditional"
