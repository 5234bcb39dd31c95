"""Matcher - 条件树节点与求值入口

所有 matcher 都是不可变的，求值不会修改 matcher 或输入记录，可跨线程复用。

节点类型（MatcherKind）：
- LEAF: 绑定一个字段的谓词（LeafMatcher、ChangeMatcher）
- COMBINATOR: AND / OR / NOT 组合
- CUSTOM: 调用方扩展（CustomMatcher 子类、must / must_not 作用域）
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from .. import config
from ..errors import FailureHint, UnsupportedRecord
from ..utils.logger import logger
from . import predicates
from .access import ABSENT, AccessMode, read_field, record_id, resolve
from .partition import PartitionResult


class MatcherKind(Enum):
    LEAF = "leaf"
    COMBINATOR = "combinator"
    CUSTOM = "custom"


class Matcher(ABC):
    """条件树的公共接口

    求值入口：
    - evaluate(record) / evaluate(record, prior): 单条记录（可选旧版本）
    - evaluate_all(records) / evaluate_all(records, prior_by_id): 批量划分
    """

    kind: ClassVar[MatcherKind]

    @abstractmethod
    def _matches(self, record: Any, prior: Any) -> bool:
        """内部求值，prior 为 None 表示没有旧版本"""
        ...

    @abstractmethod
    def describe(self) -> str:
        """节点自身的单行描述（不含子节点）"""
        ...

    @property
    def children(self) -> tuple["Matcher", ...]:
        return ()

    def evaluate(self, record: Any, prior: Any = None) -> bool:
        """对单条记录求值，可选传入旧版本记录"""
        return self._matches(record, prior)

    def evaluate_all(
        self,
        records: Iterable[Any],
        prior_by_id: Mapping[Any, Any] | None = None,
        id_of: Callable[[Any], Any] | None = None,
    ) -> PartitionResult:
        """批量求值，按结果把记录划分为 hits / misses

        Args:
            records: 待求值的记录
            prior_by_id: 记录标识 -> 旧版本记录（可选）
            id_of: 读取记录标识的函数，默认读取 config.RECORD_ID_FIELD 字段

        Returns:
            PartitionResult，两侧都保持输入顺序
        """
        if prior_by_id is not None and id_of is None:
            id_field = config.RECORD_ID_FIELD

            def id_of(record: Any) -> Any:
                return record_id(record, id_field)

        hits: list[Any] = []
        misses: list[Any] = []

        for record in records:
            prior = None
            if prior_by_id is not None:
                key = id_of(record)  # type: ignore
                if key is not None:
                    try:
                        prior = prior_by_id.get(key)
                    except TypeError:
                        raise UnsupportedRecord(
                            FailureHint(
                                f"记录标识 {key!r} 不可哈希，无法查找旧版本",
                                suggestion="使用可哈希的标识字段，或传入 id_of 返回可哈希的键",
                            )
                        ) from None

            if self._matches(record, prior):
                hits.append(record)
            else:
                misses.append(record)

        logger.debug(
            f"[Evaluate:Bulk] {len(hits)} hits, {len(misses)} misses "
            f"(prior={'yes' if prior_by_id is not None else 'no'})"
        )
        return PartitionResult(hits, misses)

    def filter(
        self,
        records: Iterable[Any],
        prior_by_id: Mapping[Any, Any] | None = None,
        id_of: Callable[[Any], Any] | None = None,
    ) -> list[Any]:
        """只返回匹配的记录"""
        return self.evaluate_all(records, prior_by_id, id_of).hits

    def explain(self) -> str:
        """以缩进文本展示整棵条件树"""
        lines: list[str] = []
        stack: list[tuple[Matcher, int]] = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append("  " * depth + node.describe())
            for child in reversed(node.children):
                stack.append((child, depth + 1))
        return "\n".join(lines)

    def __and__(self, other: "Matcher") -> "Matcher":
        if not isinstance(other, Matcher):
            return NotImplemented
        return AndMatcher(_flatten(AndMatcher, self) + _flatten(AndMatcher, other))

    def __or__(self, other: "Matcher") -> "Matcher":
        if not isinstance(other, Matcher):
            return NotImplemented
        return OrMatcher(_flatten(OrMatcher, self) + _flatten(OrMatcher, other))

    def __invert__(self) -> "Matcher":
        return NotMatcher(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


def _flatten(cls: type, matcher: Matcher) -> tuple[Matcher, ...]:
    if type(matcher) is cls:
        return matcher.children
    return (matcher,)


def _field_label(field: Hashable, mode: AccessMode) -> str:
    if isinstance(field, Enum):
        field = field.name
    prefix = "prior_field_value" if mode is AccessMode.PRIOR else "field_value"
    return f"{prefix}({field!r})"


def _args_label(args: tuple) -> str:
    return ", ".join(repr(a.pattern) if hasattr(a, "pattern") else repr(a) for a in args)


# ---- 叶子节点 ----


@dataclass(frozen=True, repr=False)
class LeafMatcher(Matcher):
    """绑定一个字段和访问模式的谓词"""

    kind: ClassVar[MatcherKind] = MatcherKind.LEAF

    field: Hashable
    mode: AccessMode
    name: str
    predicate: Callable[..., bool]
    args: tuple = ()

    def _matches(self, record: Any, prior: Any) -> bool:
        value = resolve(record, self.field, self.mode, prior)
        return self.predicate(value, *self.args)

    def describe(self) -> str:
        return f"{_field_label(self.field, self.mode)}.{self.name}({_args_label(self.args)})"


@dataclass(frozen=True, repr=False)
class ChangeMatcher(Matcher):
    """变更检测：同时读取当前值和旧值

    from_values / to_values 为 None 表示不限制该端。没有旧版本时恒为 False。
    """

    kind: ClassVar[MatcherKind] = MatcherKind.LEAF

    field: Hashable
    name: str
    from_values: tuple | None = None
    to_values: tuple | None = None

    def _matches(self, record: Any, prior: Any) -> bool:
        if prior is None:
            return False
        return predicates.changed_from_any_to_any(
            read_field(record, self.field),
            read_field(prior, self.field),
            self.from_values,
            self.to_values,
        )

    def describe(self) -> str:
        args = tuple(v for v in (self.from_values, self.to_values) if v is not None)
        return f"{_field_label(self.field, AccessMode.CURRENT)}.{self.name}({_args_label(args)})"


# ---- 组合节点 ----


@dataclass(frozen=True, repr=False)
class AndMatcher(Matcher):
    """所有子节点为真；按声明顺序求值，遇到 False 短路。空子节点为真"""

    kind: ClassVar[MatcherKind] = MatcherKind.COMBINATOR

    members: tuple[Matcher, ...] = ()

    @property
    def children(self) -> tuple[Matcher, ...]:
        return self.members

    def _matches(self, record: Any, prior: Any) -> bool:
        return all(m._matches(record, prior) for m in self.members)

    def describe(self) -> str:
        return "AND"


@dataclass(frozen=True, repr=False)
class OrMatcher(Matcher):
    """至少一个子节点为真；遇到 True 短路。空子节点为假"""

    kind: ClassVar[MatcherKind] = MatcherKind.COMBINATOR

    members: tuple[Matcher, ...] = ()

    @property
    def children(self) -> tuple[Matcher, ...]:
        return self.members

    def _matches(self, record: Any, prior: Any) -> bool:
        return any(m._matches(record, prior) for m in self.members)

    def describe(self) -> str:
        return "OR"


@dataclass(frozen=True, repr=False)
class NotMatcher(Matcher):
    kind: ClassVar[MatcherKind] = MatcherKind.COMBINATOR

    member: Matcher

    @property
    def children(self) -> tuple[Matcher, ...]:
        return (self.member,)

    def _matches(self, record: Any, prior: Any) -> bool:
        return not self.member._matches(record, prior)

    def describe(self) -> str:
        return "NOT"


# ---- 扩展点 ----


@dataclass(frozen=True, repr=False)
class FieldScopeMatcher(Matcher):
    """must / must_not：把任意 matcher 作用在字段值上

    字段值作为内层 matcher 的"记录"，旧记录的同名字段值作为内层的 prior。
    字段未设置时 must 与 must_not 都为 False。
    """

    kind: ClassVar[MatcherKind] = MatcherKind.CUSTOM

    field: Hashable
    mode: AccessMode
    inner: Matcher
    negated: bool = False

    @property
    def children(self) -> tuple[Matcher, ...]:
        return (self.inner,)

    def _matches(self, record: Any, prior: Any) -> bool:
        value = resolve(record, self.field, self.mode, prior)
        if value is ABSENT:
            return False

        inner_prior = None
        if prior is not None and self.mode is AccessMode.CURRENT:
            prior_value = read_field(prior, self.field)
            inner_prior = None if prior_value is ABSENT else prior_value

        return self.inner._matches(value, inner_prior) != self.negated

    def describe(self) -> str:
        name = "must_not" if self.negated else "must"
        return f"{_field_label(self.field, self.mode)}.{name}"


class CustomMatcher(Matcher):
    """自定义谓词的基类

    子类只需实现 matches_impl(record)，可以定义自己的 __init__ 而不调用
    super().__init__()（此时 mode 为 CURRENT）。mode 为 PRIOR 时传入旧记录，
    没有旧记录时退化为当前记录。

    matcher 会被多次、跨线程复用，子类不能在 matches_impl 中保存每次求值的状态。
    """

    kind: ClassVar[MatcherKind] = MatcherKind.CUSTOM

    _mode: AccessMode = AccessMode.CURRENT

    def __init__(self, mode: AccessMode = AccessMode.CURRENT):
        object.__setattr__(self, "_mode", mode)

    @property
    def mode(self) -> AccessMode:
        return self._mode

    @abstractmethod
    def matches_impl(self, record: Any) -> bool: ...

    def _matches(self, record: Any, prior: Any) -> bool:
        target = prior if self._mode is AccessMode.PRIOR and prior is not None else record
        return bool(self.matches_impl(target))

    def describe(self) -> str:
        if self._mode is AccessMode.PRIOR:
            return f"{type(self).__name__}(prior)"
        return type(self).__name__


class RuleMatcher(CustomMatcher):
    """把普通函数包装成 CustomMatcher（构造后不可修改）"""

    def __init__(
        self,
        fn: Callable[[Any], bool],
        mode: AccessMode = AccessMode.CURRENT,
        name: str | None = None,
    ):
        super().__init__(mode)
        object.__setattr__(self, "_fn", fn)
        object.__setattr__(self, "_name", name or getattr(fn, "__name__", "rule"))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} 不可修改")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} 不可修改")

    def matches_impl(self, record: Any) -> bool:
        return self._fn(record)

    def describe(self) -> str:
        if self._mode is AccessMode.PRIOR:
            return f"rule({self._name}, prior)"
        return f"rule({self._name})"
