"""谓词库 - 作用于已解析字段值的纯函数

所有谓词签名为 (value, *args) -> bool，value 可能是 ABSENT。
除了空值/空白相关的谓词，其余谓词在 ABSENT 上一律返回 False。
"""

import re
from collections.abc import Iterable
from datetime import date, time
from decimal import Decimal
from numbers import Real
from typing import Any

from .access import ABSENT
from .similarity import is_similar

ORDERABLE_TYPES = (Real, Decimal, date, time)


def is_orderable(value: Any) -> bool:
    """数值、日期、时间类型（bool 除外）"""
    return isinstance(value, ORDERABLE_TYPES) and not isinstance(value, bool)


def as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def values_equal(value: Any, expected: Any) -> bool:
    """考虑 ABSENT 的相等判断：None 期望值与 ABSENT 相等

    bool 只与 bool 相等（True 不等于 1），与 is_orderable 排除 bool 一致。
    """
    if expected is None:
        expected = ABSENT
    if value is ABSENT or expected is ABSENT:
        return value is expected
    if isinstance(value, bool) != isinstance(expected, bool):
        return False
    return value == expected


# ---- 空值 ----


def nil(value: Any) -> bool:
    return value is ABSENT


def not_nil(value: Any) -> bool:
    return value is not ABSENT


# ---- 相等 / 集合 ----


def equals(value: Any, expected: Any) -> bool:
    return values_equal(value, expected)


def not_equals(value: Any, expected: Any) -> bool:
    if value is ABSENT:
        return False
    return not values_equal(value, expected)


def equals_ignore_case(value: Any, expected: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).lower() == expected.lower()


def not_equals_ignore_case(value: Any, expected: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).lower() != expected.lower()


def equals_any(value: Any, candidates: Iterable[Any]) -> bool:
    return any(values_equal(value, c) for c in candidates)


def equals_none(value: Any, candidates: Iterable[Any]) -> bool:
    if value is ABSENT:
        return False
    return not equals_any(value, candidates)


def equals_any_ignore_case(value: Any, candidates: Iterable[str]) -> bool:
    if value is ABSENT:
        return False
    text = as_text(value).lower()
    return any(text == c.lower() for c in candidates)


def equals_none_ignore_case(value: Any, candidates: Iterable[str]) -> bool:
    if value is ABSENT:
        return False
    return not equals_any_ignore_case(value, candidates)


# ---- 排序比较 ----


def _compare(value: Any, op, bound: Any) -> bool:
    # 非数值/日期类型或类型不兼容时视为不匹配，保证求值不抛异常
    if not is_orderable(value):
        return False
    try:
        return op(value, bound)
    except TypeError:
        return False


def greater(value: Any, bound: Any) -> bool:
    return _compare(value, lambda v, b: v > b, bound)


def greater_equals(value: Any, bound: Any) -> bool:
    return _compare(value, lambda v, b: v >= b, bound)


def less(value: Any, bound: Any) -> bool:
    return _compare(value, lambda v, b: v < b, bound)


def less_equals(value: Any, bound: Any) -> bool:
    return _compare(value, lambda v, b: v <= b, bound)


def between_incl(value: Any, lo: Any, hi: Any) -> bool:
    return greater_equals(value, lo) and less_equals(value, hi)


def between_excl(value: Any, lo: Any, hi: Any) -> bool:
    return greater(value, lo) and less(value, hi)


def outside_incl(value: Any, lo: Any, hi: Any) -> bool:
    """between_incl 的否定（仅对可比较的值）"""
    return _compare(value, lambda v, b: not (b[0] <= v <= b[1]), (lo, hi))


def outside_excl(value: Any, lo: Any, hi: Any) -> bool:
    """between_excl 的否定（仅对可比较的值）"""
    return _compare(value, lambda v, b: not (b[0] < v < b[1]), (lo, hi))


# ---- 字符串形态 ----


def blank(value: Any) -> bool:
    return value is ABSENT or not as_text(value).strip()


def not_blank(value: Any) -> bool:
    return not blank(value)


def empty(value: Any) -> bool:
    return value is ABSENT or len(as_text(value)) == 0


def not_empty(value: Any) -> bool:
    return not empty(value)


def length(value: Any, size: int) -> bool:
    if value is ABSENT:
        return False
    return len(as_text(value)) == size


def length_between(value: Any, lo: int, hi: int) -> bool:
    if value is ABSENT:
        return False
    return lo <= len(as_text(value)) <= hi


def min_length(value: Any, size: int) -> bool:
    if value is ABSENT:
        return False
    return len(as_text(value)) >= size


def max_length(value: Any, size: int) -> bool:
    if value is ABSENT:
        return False
    return len(as_text(value)) <= size


def starts_with(value: Any, prefix: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).startswith(prefix)


def starts_with_ignore_case(value: Any, prefix: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).lower().startswith(prefix.lower())


def ends_with(value: Any, suffix: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).endswith(suffix)


def ends_with_ignore_case(value: Any, suffix: str) -> bool:
    if value is ABSENT:
        return False
    return as_text(value).lower().endswith(suffix.lower())


def contains(value: Any, part: str) -> bool:
    if value is ABSENT:
        return False
    return part in as_text(value)


def contains_ignore_case(value: Any, part: str) -> bool:
    if value is ABSENT:
        return False
    return part.lower() in as_text(value).lower()


def not_contains(value: Any, part: str) -> bool:
    if value is ABSENT:
        return False
    return part not in as_text(value)


def not_contains_ignore_case(value: Any, part: str) -> bool:
    if value is ABSENT:
        return False
    return part.lower() not in as_text(value).lower()


def regex(value: Any, pattern: re.Pattern) -> bool:
    if value is ABSENT:
        return False
    return pattern.fullmatch(as_text(value)) is not None


def similar(value: Any, text: str, threshold: float) -> bool:
    if value is ABSENT:
        return False
    return is_similar(as_text(value), text, threshold)


# ---- 变更检测（需要当前值和旧值） ----


def changed(current: Any, prior: Any) -> bool:
    return not values_equal(current, prior)


def changed_from_any_to_any(
    current: Any,
    prior: Any,
    from_values: tuple | None,
    to_values: tuple | None,
) -> bool:
    """from_values / to_values 为 None 表示不限制该端"""
    if not changed(current, prior):
        return False
    if from_values is not None and not equals_any(prior, from_values):
        return False
    if to_values is not None and not equals_any(current, to_values):
        return False
    return True
