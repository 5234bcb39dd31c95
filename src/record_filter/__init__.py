"""record-filter - 声明式记录过滤条件的组合与求值"""

from .core import (
    ABSENT,
    AccessMode,
    CustomMatcher,
    FieldReadable,
    FieldValue,
    Matcher,
    MatcherKind,
    PartitionResult,
    and_,
    field_value,
    not_,
    or_,
    prior_field_value,
    rule,
)
from .errors import (
    FailureHint,
    InvalidPredicateArguments,
    InvalidTreeShape,
    MatcherError,
    UnsupportedRecord,
)

__all__ = [
    "ABSENT",
    "AccessMode",
    "CustomMatcher",
    "FieldReadable",
    "FieldValue",
    "Matcher",
    "MatcherKind",
    "PartitionResult",
    "and_",
    "field_value",
    "not_",
    "or_",
    "prior_field_value",
    "rule",
    "FailureHint",
    "InvalidPredicateArguments",
    "InvalidTreeShape",
    "MatcherError",
    "UnsupportedRecord",
]
