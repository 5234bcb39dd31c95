"""字段访问器 - 按字段标识从记录读取当前值或旧值"""

from collections.abc import Hashable, Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from ..errors import FailureHint, UnsupportedRecord


class _Absent:
    """未设置字段的哨兵值（单例）"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT: Any = _Absent()


class AccessMode(Enum):
    CURRENT = "current"
    PRIOR = "prior"


@runtime_checkable
class FieldReadable(Protocol):
    """自定义记录类型实现此协议即可被 matcher 读取"""

    def get_field(self, field_id: Hashable) -> Any: ...


def read_field(record: Any, field_id: Hashable) -> Any:
    """从单条记录读取字段值，未设置（缺失或 None）返回 ABSENT

    支持三种记录形态：
    - 实现 FieldReadable 的对象：调用 get_field
    - Mapping：按 key 查找
    - 普通对象：字段标识为字符串（或值为字符串的 Enum）时按属性查找
    """
    if isinstance(record, FieldReadable):
        value = record.get_field(field_id)
    elif isinstance(record, Mapping):
        value = record.get(field_id, ABSENT)
    else:
        name = field_id.value if isinstance(field_id, Enum) else field_id
        if not isinstance(name, str):
            raise UnsupportedRecord(
                FailureHint(
                    f"无法用字段标识 {field_id!r} 读取 {type(record).__name__} 类型的记录",
                    suggestion="使用字符串字段名，或让记录类型实现 get_field",
                )
            )
        value = getattr(record, name, ABSENT)

    return ABSENT if value is None else value


def resolve(
    record: Any, field_id: Hashable, mode: AccessMode, prior: Any = None
) -> Any:
    """按访问模式解析字段值

    PRIOR 模式下没有 prior 记录时退化为读取当前记录。
    """
    if mode is AccessMode.PRIOR and prior is not None:
        return read_field(prior, field_id)
    return read_field(record, field_id)


def record_id(record: Any, id_field: Hashable) -> Any:
    """读取记录的标识（用于在 prior 映射中查找旧版本）"""
    value = read_field(record, id_field)
    return None if value is ABSENT else value
