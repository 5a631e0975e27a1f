# -*- coding: utf-8 -*-
"""
Xdebug 函数跟踪数据模型定义
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Any, Optional, Tuple


class EventKind(IntEnum):
    """跟踪事件类型 (Xdebug format 1 的第三列)"""
    ENTRY = 0
    EXIT = 1
    RETURN = 2

    @property
    def closes_call(self) -> bool:
        """EXIT 与 RETURN 都会关闭栈顶调用"""
        return self is not EventKind.ENTRY


@dataclass(frozen=True)
class TraceEvent:
    """单行跟踪事件"""
    depth: int
    call_id: int
    kind: EventKind
    time: float  # 秒
    memory: int = 0
    function: str = 'unknown'
    file: str = ''
    line: int = 0


@dataclass(frozen=True)
class CallRecord:
    """一次函数调用"""
    function: str
    file: str
    line: int
    start_time: float
    end_time: Optional[float] = None
    duration_ms: Optional[float] = None
    children: Tuple['CallRecord', ...] = ()

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class TraceMeta:
    """跟踪汇总信息"""
    total_time_ms: float = 0.0
    function_count: int = 0
    timestamp: str = ''
    php_version: str = 'unknown'

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式，保持字段顺序"""
        return {
            'total_time_ms': self.total_time_ms,
            'function_count': self.function_count,
            'timestamp': self.timestamp,
            'php_version': self.php_version,
        }


@dataclass(frozen=True)
class TraceDocument:
    """解析结果：汇总信息 + 调用森林"""
    meta: TraceMeta = field(default_factory=TraceMeta)
    forest: Tuple[CallRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.forest
