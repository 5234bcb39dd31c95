"""谓词参数验证函数 - 构造期验证层"""

import re
from collections.abc import Iterable
from typing import Any

from rusty_results.prelude import Err, Ok, Result

from ..errors import FailureHint
from ..utils.logger import logger
from .matcher import Matcher
from .predicates import is_orderable


def validate_bound(bound: Any) -> Result[Any, FailureHint]:
    """验证排序比较的边界（数值、日期或时间）"""
    if not is_orderable(bound):
        logger.warning(f"[Validate:Bound] Not orderable: {bound!r}")
        return Err(
            FailureHint(
                f"边界 {bound!r} 不是数值、日期或时间类型",
                suggestion="排序比较只适用于数值、Decimal、date、datetime、time",
            )
        )
    return Ok(bound)


def validate_range(lo: Any, hi: Any) -> Result[tuple[Any, Any], FailureHint]:
    """验证区间边界（两端可比较，且 lo <= hi）"""
    errors = []
    for bound in (lo, hi):
        match validate_bound(bound):
            case Err(e):
                errors.append(e.message)

    if errors:
        return Err(FailureHint("区间验证失败: " + "; ".join(errors)))

    try:
        inverted = lo > hi
    except TypeError:
        logger.warning(f"[Validate:Range] Incomparable: {lo!r}, {hi!r}")
        return Err(FailureHint(f"区间边界 {lo!r} 和 {hi!r} 类型不兼容"))

    if inverted:
        logger.warning(f"[Validate:Range] Inverted: {lo!r} > {hi!r}")
        return Err(
            FailureHint(
                f"区间下界 {lo!r} 大于上界 {hi!r}",
                suggestion="交换两个边界的顺序",
            )
        )

    return Ok((lo, hi))


def validate_size(size: Any) -> Result[int, FailureHint]:
    """验证长度参数（非负整数）"""
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        logger.warning(f"[Validate:Size] Invalid: {size!r}")
        return Err(FailureHint(f"长度 {size!r} 必须是非负整数"))
    return Ok(size)


def validate_size_range(lo: Any, hi: Any) -> Result[tuple[int, int], FailureHint]:
    """验证长度区间（两端为非负整数，且 lo <= hi）"""
    errors = []
    for size in (lo, hi):
        match validate_size(size):
            case Err(e):
                errors.append(e.message)

    if errors:
        return Err(FailureHint("长度区间验证失败: " + "; ".join(errors)))

    if lo > hi:
        logger.warning(f"[Validate:SizeRange] Inverted: {lo} > {hi}")
        return Err(
            FailureHint(
                f"长度下界 {lo} 大于上界 {hi}",
                suggestion="交换两个边界的顺序",
            )
        )

    return Ok((lo, hi))


def validate_text(text: Any) -> Result[str, FailureHint]:
    """验证字符串参数"""
    if not isinstance(text, str):
        logger.warning(f"[Validate:Text] Not a string: {text!r}")
        return Err(FailureHint(f"参数 {text!r} 必须是字符串"))
    return Ok(text)


def validate_texts(texts: Iterable[Any]) -> Result[tuple[str, ...], FailureHint]:
    """验证字符串列表（收集所有错误，不 fail fast）"""
    if isinstance(texts, str):
        return Err(
            FailureHint(
                "候选值必须是字符串列表，而不是单个字符串",
                suggestion=f"使用 [{texts!r}]",
            )
        )

    values = tuple(texts)
    errors = [f"{t!r}" for t in values if not isinstance(t, str)]

    if errors:
        logger.warning(f"[Validate:Texts] Not strings: {', '.join(errors)}")
        return Err(FailureHint("候选值必须都是字符串: " + ", ".join(errors)))

    return Ok(values)


def validate_candidates(values: Iterable[Any]) -> Result[tuple[Any, ...], FailureHint]:
    """验证候选值集合（有限、可迭代，且不是单个字符串）"""
    if isinstance(values, str):
        return Err(
            FailureHint(
                "候选值必须是集合，而不是单个字符串",
                suggestion=f"使用 [{values!r}]",
            )
        )
    try:
        return Ok(tuple(values))
    except TypeError:
        logger.warning(f"[Validate:Candidates] Not iterable: {values!r}")
        return Err(FailureHint(f"候选值 {values!r} 不可迭代"))


def validate_pattern(pattern: Any) -> Result[re.Pattern, FailureHint]:
    """验证并编译正则表达式"""
    if isinstance(pattern, re.Pattern):
        if isinstance(pattern.pattern, bytes):
            logger.warning(f"[Validate:Pattern] Bytes pattern: {pattern.pattern!r}")
            return Err(
                FailureHint(
                    f"正则表达式 {pattern.pattern!r} 是 bytes 模式，不能匹配字段的字符串形式",
                    suggestion="使用 str 模式编译正则表达式",
                )
            )
        return Ok(pattern)

    match validate_text(pattern):
        case Err(e):
            return Err(e)

    try:
        return Ok(re.compile(pattern))
    except re.error as e:
        logger.warning(f"[Validate:Pattern] Invalid regex {pattern!r}: {e}")
        return Err(
            FailureHint(
                f"正则表达式 {pattern!r} 无效: {e}",
                suggestion="检查正则语法，例如括号是否配对",
            )
        )


def validate_threshold(threshold: Any) -> Result[float, FailureHint]:
    """验证相似度阈值（0-1）"""
    if (
        isinstance(threshold, bool)
        or not isinstance(threshold, (int, float))
        or not 0 <= threshold <= 1
    ):
        logger.warning(f"[Validate:Threshold] Out of range: {threshold!r}")
        return Err(FailureHint(f"相似度阈值 {threshold!r} 必须在 0 到 1 之间"))
    return Ok(float(threshold))


def validate_children(members: tuple[Any, ...]) -> Result[tuple[Matcher, ...], FailureHint]:
    """验证组合节点的子节点（位置参数或单个集合参数，元素都必须是 Matcher）"""
    if len(members) == 1 and not isinstance(members[0], Matcher):
        if isinstance(members[0], Iterable) and not isinstance(members[0], (str, bytes)):
            members = tuple(members[0])

    errors = [
        f"第 {idx} 个子节点 {m!r} 不是 Matcher"
        for idx, m in enumerate(members, start=1)
        if not isinstance(m, Matcher)
    ]

    if errors:
        logger.warning(f"[Validate:Children] Failed: {'; '.join(errors)}")
        return Err(
            FailureHint(
                "子节点验证失败: " + "; ".join(errors),
                suggestion="用 field_value(...) 的谓词方法或 and_/or_/not_ 构造子节点",
            )
        )

    return Ok(tuple(members))


def validate_single_child(members: tuple[Any, ...]) -> Result[Matcher, FailureHint]:
    """验证 NOT 的子节点（恰好一个）"""
    match validate_children(members):
        case Err(e):
            return Err(e)
        case Ok(children):
            pass

    if len(children) != 1:
        logger.warning(f"[Validate:Children] NOT expects 1 child, got {len(children)}")
        return Err(
            FailureHint(
                f"NOT 需要恰好一个子节点，实际为 {len(children)} 个",
                suggestion="用 and_/or_ 先把多个条件组合起来",
            )
        )

    return Ok(children[0])
