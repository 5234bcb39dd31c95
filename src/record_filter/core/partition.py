"""批量求值结果"""

from typing import Any, NamedTuple


class PartitionResult(NamedTuple):
    """批量求值的划分结果

    - hits: 匹配的元素（保持输入顺序）
    - misses: 不匹配的元素（保持输入顺序）

    元素是输入中的原对象，不做复制或转换。
    """

    hits: list[Any]
    misses: list[Any]

    @property
    def total(self) -> int:
        return len(self.hits) + len(self.misses)
