"""fieldrules - named field-validation predicates with cross-field and store-backed rules."""

__version__ = "0.1.0"

from .errors import InvalidRuleArgument, MalformedRuleSpec, RuleError, StoreNotConfigured, UnknownPredicate
from .lookup import NOT_FOUND, dot_search
from .rules import PREDICATES, RuleContext, check

__all__ = [
    "InvalidRuleArgument",
    "MalformedRuleSpec",
    "NOT_FOUND",
    "PREDICATES",
    "RuleContext",
    "RuleError",
    "StoreNotConfigured",
    "UnknownPredicate",
    "__version__",
    "check",
    "dot_search",
]
