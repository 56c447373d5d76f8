# domainkit/decorators/components/__init__.py
from .attribute_decorator import AttributeDecorator
from .behavior_decorator import BehaviorDecorator
from .event_decorators import DomainEventDecorator, EventHandlerDecorator
from .expectation_decorator import ExpectationDecorator
from .journey_decorator import JourneyDecorator
from .logic_decorators import LogicDecorator, PolicyDecorator, RuleDecorator, SpecificationDecorator
from .milestone_decorator import MilestoneDecorator
from .stakeholder_decorators import BoundedContextDecorator, PersonaDecorator, StakeholderDecorator
from .step_decorator import StepDecorator
from .test_decorator import TestDecorator

milestone = MilestoneDecorator()
step = StepDecorator()
journey = JourneyDecorator()
logic = LogicDecorator()
rule = RuleDecorator()
policy = PolicyDecorator()
specification = SpecificationDecorator()
domain_event = DomainEventDecorator()
event_handler = EventHandlerDecorator()
attribute = AttributeDecorator()
persona = PersonaDecorator()
stakeholder = StakeholderDecorator()
bounded_context = BoundedContextDecorator()
behavior = BehaviorDecorator()
expectation = ExpectationDecorator()
test_case = TestDecorator()
__all__ = [
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
