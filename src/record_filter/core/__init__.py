"""核心模块 - 字段访问、谓词库、matcher 树与求值"""

from . import predicates, validators
from .access import ABSENT, AccessMode, FieldReadable
from .builder import FieldValue, and_, field_value, not_, or_, prior_field_value, rule
from .matcher import CustomMatcher, Matcher, MatcherKind
from .partition import PartitionResult

__all__ = [
    "predicates",
    "validators",
    "ABSENT",
    "AccessMode",
    "FieldReadable",
    "FieldValue",
    "and_",
    "field_value",
    "not_",
    "or_",
    "prior_field_value",
    "rule",
    "CustomMatcher",
    "Matcher",
    "MatcherKind",
    "PartitionResult",
]
