"""错误类型 - 构造期的调用方契约违规"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FailureHint:
    """带建议的错误类型"""

    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}\n建议: {self.suggestion}"
        return self.message


class MatcherError(Exception):
    """所有 matcher 错误的基类，携带 FailureHint"""

    def __init__(self, hint: FailureHint):
        super().__init__(str(hint))
        self.hint = hint


class InvalidPredicateArguments(MatcherError):
    """谓词参数不合法（边界类型、长度、正则等）"""


class InvalidTreeShape(MatcherError):
    """matcher 树结构不合法（子节点不是 Matcher、NOT 子节点数量不为 1）"""


class UnsupportedRecord(MatcherError):
    """无法从该记录读取字段"""
