"""构造入口 - 字段谓词构造器和组合工厂函数

用法：
    rule = and_(
        field_value("revenue").between_incl(200000, 300000),
        field_value("type").equals("Partner"),
    )
    hits, misses = rule.evaluate_all(records)

参数在构造时验证，不合法时抛出 InvalidPredicateArguments / InvalidTreeShape。
"""

from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

from rusty_results.prelude import Err, Ok, Result

from ..config import FUZZY_MATCH_THRESHOLD
from ..errors import FailureHint, InvalidPredicateArguments, InvalidTreeShape
from . import predicates
from .access import AccessMode
from .matcher import (
    AndMatcher,
    ChangeMatcher,
    FieldScopeMatcher,
    LeafMatcher,
    Matcher,
    NotMatcher,
    OrMatcher,
    RuleMatcher,
)
from .validators import (
    validate_bound,
    validate_candidates,
    validate_children,
    validate_pattern,
    validate_range,
    validate_single_child,
    validate_size,
    validate_size_range,
    validate_text,
    validate_texts,
    validate_threshold,
)

T = TypeVar("T")


def _unwrap_args(result: Result[T, FailureHint]) -> T:
    match result:
        case Ok(value):
            return value
        case Err(e):
            raise InvalidPredicateArguments(e)


def _unwrap_shape(result: Result[T, FailureHint]) -> T:
    match result:
        case Ok(value):
            return value
        case Err(e):
            raise InvalidTreeShape(e)


class FieldValue:
    """绑定字段和访问模式的谓词构造器，每个谓词方法返回一个 Matcher"""

    def __init__(self, field: Hashable, mode: AccessMode = AccessMode.CURRENT):
        self._field = field
        self._mode = mode

    @property
    def field(self) -> Hashable:
        return self._field

    @property
    def mode(self) -> AccessMode:
        return self._mode

    def _leaf(self, name: str, predicate: Callable[..., bool], *args: Any) -> Matcher:
        return LeafMatcher(self._field, self._mode, name, predicate, args)

    # 空值

    def nil(self) -> Matcher:
        return self._leaf("nil", predicates.nil)

    def not_nil(self) -> Matcher:
        return self._leaf("not_nil", predicates.not_nil)

    # 相等 / 集合

    def equals(self, value: Any) -> Matcher:
        return self._leaf("equals", predicates.equals, value)

    def not_equals(self, value: Any) -> Matcher:
        return self._leaf("not_equals", predicates.not_equals, value)

    def equals_ignore_case(self, text: str) -> Matcher:
        text = _unwrap_args(validate_text(text))
        return self._leaf("equals_ignore_case", predicates.equals_ignore_case, text)

    def not_equals_ignore_case(self, text: str) -> Matcher:
        text = _unwrap_args(validate_text(text))
        return self._leaf("not_equals_ignore_case", predicates.not_equals_ignore_case, text)

    def equals_any(self, values: Iterable[Any]) -> Matcher:
        values = _unwrap_args(validate_candidates(values))
        return self._leaf("equals_any", predicates.equals_any, values)

    def equals_none(self, values: Iterable[Any]) -> Matcher:
        values = _unwrap_args(validate_candidates(values))
        return self._leaf("equals_none", predicates.equals_none, values)

    def equals_any_ignore_case(self, texts: Iterable[str]) -> Matcher:
        texts = _unwrap_args(validate_texts(texts))
        return self._leaf("equals_any_ignore_case", predicates.equals_any_ignore_case, texts)

    def equals_none_ignore_case(self, texts: Iterable[str]) -> Matcher:
        texts = _unwrap_args(validate_texts(texts))
        return self._leaf("equals_none_ignore_case", predicates.equals_none_ignore_case, texts)

    # 排序比较（数值 / 日期 / 时间）

    def greater(self, bound: Any) -> Matcher:
        return self._leaf("greater", predicates.greater, _unwrap_args(validate_bound(bound)))

    def greater_equals(self, bound: Any) -> Matcher:
        return self._leaf(
            "greater_equals", predicates.greater_equals, _unwrap_args(validate_bound(bound))
        )

    def less(self, bound: Any) -> Matcher:
        return self._leaf("less", predicates.less, _unwrap_args(validate_bound(bound)))

    def less_equals(self, bound: Any) -> Matcher:
        return self._leaf(
            "less_equals", predicates.less_equals, _unwrap_args(validate_bound(bound))
        )

    def between_incl(self, lo: Any, hi: Any) -> Matcher:
        """lo <= v <= hi"""
        lo, hi = _unwrap_args(validate_range(lo, hi))
        return self._leaf("between_incl", predicates.between_incl, lo, hi)

    def between_excl(self, lo: Any, hi: Any) -> Matcher:
        """lo < v < hi"""
        lo, hi = _unwrap_args(validate_range(lo, hi))
        return self._leaf("between_excl", predicates.between_excl, lo, hi)

    def outside_incl(self, lo: Any, hi: Any) -> Matcher:
        lo, hi = _unwrap_args(validate_range(lo, hi))
        return self._leaf("outside_incl", predicates.outside_incl, lo, hi)

    def outside_excl(self, lo: Any, hi: Any) -> Matcher:
        lo, hi = _unwrap_args(validate_range(lo, hi))
        return self._leaf("outside_excl", predicates.outside_excl, lo, hi)

    # 字符串形态

    def blank(self) -> Matcher:
        return self._leaf("blank", predicates.blank)

    def not_blank(self) -> Matcher:
        return self._leaf("not_blank", predicates.not_blank)

    def empty(self) -> Matcher:
        return self._leaf("empty", predicates.empty)

    def not_empty(self) -> Matcher:
        return self._leaf("not_empty", predicates.not_empty)

    def length(self, size: int) -> Matcher:
        return self._leaf("length", predicates.length, _unwrap_args(validate_size(size)))

    def length_between(self, lo: int, hi: int) -> Matcher:
        lo, hi = _unwrap_args(validate_size_range(lo, hi))
        return self._leaf("length_between", predicates.length_between, lo, hi)

    def min_length(self, size: int) -> Matcher:
        return self._leaf("min_length", predicates.min_length, _unwrap_args(validate_size(size)))

    def max_length(self, size: int) -> Matcher:
        return self._leaf("max_length", predicates.max_length, _unwrap_args(validate_size(size)))

    def starts_with(self, prefix: str) -> Matcher:
        return self._leaf("starts_with", predicates.starts_with, _unwrap_args(validate_text(prefix)))

    def starts_with_ignore_case(self, prefix: str) -> Matcher:
        prefix = _unwrap_args(validate_text(prefix))
        return self._leaf("starts_with_ignore_case", predicates.starts_with_ignore_case, prefix)

    def ends_with(self, suffix: str) -> Matcher:
        return self._leaf("ends_with", predicates.ends_with, _unwrap_args(validate_text(suffix)))

    def ends_with_ignore_case(self, suffix: str) -> Matcher:
        suffix = _unwrap_args(validate_text(suffix))
        return self._leaf("ends_with_ignore_case", predicates.ends_with_ignore_case, suffix)

    def contains(self, part: str) -> Matcher:
        return self._leaf("contains", predicates.contains, _unwrap_args(validate_text(part)))

    def contains_ignore_case(self, part: str) -> Matcher:
        part = _unwrap_args(validate_text(part))
        return self._leaf("contains_ignore_case", predicates.contains_ignore_case, part)

    def not_contains(self, part: str) -> Matcher:
        part = _unwrap_args(validate_text(part))
        return self._leaf("not_contains", predicates.not_contains, part)

    def not_contains_ignore_case(self, part: str) -> Matcher:
        part = _unwrap_args(validate_text(part))
        return self._leaf("not_contains_ignore_case", predicates.not_contains_ignore_case, part)

    def regex(self, pattern: Any) -> Matcher:
        """整串匹配（re.fullmatch）字段的字符串形式"""
        return self._leaf("regex", predicates.regex, _unwrap_args(validate_pattern(pattern)))

    def similar(self, text: str, threshold: float = FUZZY_MATCH_THRESHOLD) -> Matcher:
        """忽略大小写的模糊相等（Levenshtein 相似度 >= threshold）"""
        text = _unwrap_args(validate_text(text))
        threshold = _unwrap_args(validate_threshold(threshold))
        return self._leaf("similar", predicates.similar, text, threshold)

    # 变更检测

    def _change(
        self,
        name: str,
        from_values: tuple | None = None,
        to_values: tuple | None = None,
    ) -> Matcher:
        if self._mode is AccessMode.PRIOR:
            raise InvalidPredicateArguments(
                FailureHint(
                    f"变更检测 {name} 不能用于旧值字段",
                    suggestion="使用 field_value(...) 而不是 prior_field_value(...)",
                )
            )
        return ChangeMatcher(self._field, name, from_values, to_values)

    def changed(self) -> Matcher:
        return self._change("changed")

    def changed_from(self, value: Any) -> Matcher:
        return self._change("changed_from", from_values=(value,))

    def changed_from_any(self, values: Iterable[Any]) -> Matcher:
        return self._change("changed_from_any", from_values=_unwrap_args(validate_candidates(values)))

    def changed_to(self, value: Any) -> Matcher:
        return self._change("changed_to", to_values=(value,))

    def changed_to_any(self, values: Iterable[Any]) -> Matcher:
        return self._change("changed_to_any", to_values=_unwrap_args(validate_candidates(values)))

    def changed_from_to(self, from_value: Any, to_value: Any) -> Matcher:
        return self._change("changed_from_to", (from_value,), (to_value,))

    def changed_from_any_to(self, from_values: Iterable[Any], to_value: Any) -> Matcher:
        return self._change(
            "changed_from_any_to",
            _unwrap_args(validate_candidates(from_values)),
            (to_value,),
        )

    def changed_from_to_any(self, from_value: Any, to_values: Iterable[Any]) -> Matcher:
        return self._change(
            "changed_from_to_any",
            (from_value,),
            _unwrap_args(validate_candidates(to_values)),
        )

    def changed_from_any_to_any(
        self, from_values: Iterable[Any], to_values: Iterable[Any]
    ) -> Matcher:
        return self._change(
            "changed_from_any_to_any",
            _unwrap_args(validate_candidates(from_values)),
            _unwrap_args(validate_candidates(to_values)),
        )

    # 扩展

    def must(self, matcher: Matcher) -> Matcher:
        """把 matcher 作用在该字段的值上"""
        inner = _unwrap_shape(validate_single_child((matcher,)))
        return FieldScopeMatcher(self._field, self._mode, inner)

    def must_not(self, matcher: Matcher) -> Matcher:
        inner = _unwrap_shape(validate_single_child((matcher,)))
        return FieldScopeMatcher(self._field, self._mode, inner, negated=True)

    def __repr__(self) -> str:
        return f"FieldValue({self._field!r}, {self._mode.value})"


def field_value(field: Hashable) -> FieldValue:
    """当前值字段的谓词构造器"""
    return FieldValue(field, AccessMode.CURRENT)


def prior_field_value(field: Hashable) -> FieldValue:
    """旧值字段的谓词构造器（没有旧记录时退化为当前值）"""
    return FieldValue(field, AccessMode.PRIOR)


def and_(*matchers: Matcher | Iterable[Matcher]) -> Matcher:
    """所有条件为真；可传多个位置参数或一个 matcher 集合"""
    return AndMatcher(_unwrap_shape(validate_children(matchers)))


def or_(*matchers: Matcher | Iterable[Matcher]) -> Matcher:
    """至少一个条件为真；可传多个位置参数或一个 matcher 集合"""
    return OrMatcher(_unwrap_shape(validate_children(matchers)))


def not_(*matchers: Matcher) -> Matcher:
    return NotMatcher(_unwrap_shape(validate_single_child(matchers)))


def rule(
    fn: Callable[[Any], bool] | None = None,
    *,
    mode: AccessMode = AccessMode.CURRENT,
    name: str | None = None,
):
    """把普通函数包装成 CustomMatcher，可作为装饰器使用

    Example:
        @rule
        def is_vip(record):
            return record["tier"] == "vip"
    """
    if fn is None:
        return lambda f: RuleMatcher(f, mode=mode, name=name)
    return RuleMatcher(fn, mode=mode, name=name)
