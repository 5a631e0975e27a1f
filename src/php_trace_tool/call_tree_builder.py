"""
基于显式栈的调用树构建算法
时间复杂度: O(n)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple
import logging

from .models import CallRecord, EventKind, TraceDocument, TraceEvent, TraceMeta

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = ('vendor/', 'composer/')


class ExclusionRuleSet:
    """文件路径排除规则，任意模式作为子串出现即匹配"""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = list(DEFAULT_EXCLUDE_PATTERNS if patterns is None else patterns)

    def matches(self, file_path: str) -> bool:
        for pattern in self.patterns:
            if pattern in file_path:
                return True
        return False

    def add(self, pattern: str):
        """追加一个排除模式"""
        self.patterns.append(pattern)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"ExclusionRuleSet({self.patterns!r})"


@dataclass
class _ArenaNode:
    """构建过程中的可变节点，子节点以 arena 索引保存"""
    function: str
    file: str
    line: int
    start_time: float
    end_time: Optional[float] = None
    duration_ms: Optional[float] = None
    child_indices: List[int] = field(default_factory=list)


def calculate_duration_ms(start_time: float, end_time: float) -> float:
    """秒 -> 毫秒，保留两位小数"""
    return round((end_time - start_time) * 1000, 2)


def current_timestamp() -> str:
    """报告生成时间 (ISO-8601，带时区)"""
    return datetime.now().astimezone().isoformat(timespec='seconds')


class CallTreeBuilder:
    """调用树构建器"""

    def __init__(self, php_version: str = 'unknown'):
        self.logger = logger
        self.php_version = php_version
        self._arena: List[_ArenaNode] = []
        self._root_indices: List[int] = []
        self._stack: List[int] = []

    def build(self, events: Iterable[TraceEvent],
              exclusion_rules: Optional[ExclusionRuleSet] = None,
              timestamp: Optional[str] = None) -> TraceDocument:
        """
        根据事件序列构建调用树

        Args:
            events: 已解码的事件序列 (按时间顺序)
            exclusion_rules: 排除规则，None 时使用默认规则
            timestamp: 报告生成时间，None 时取当前时间

        Returns:
            TraceDocument: 汇总信息和调用森林
        """
        if exclusion_rules is None:
            exclusion_rules = ExclusionRuleSet()

        self._arena = []
        self._root_indices = []
        self._stack = []

        first_time = None
        last_time = None
        function_count = 0
        excluded_count = 0
        unmatched_exits = 0

        for event in events:
            # 总耗时与过滤无关，所有事件都参与
            if first_time is None:
                first_time = event.time
            last_time = event.time

            if event.kind is EventKind.ENTRY:
                # 被排除的调用不入栈，其子调用会挂到上一层
                if exclusion_rules.matches(event.file):
                    excluded_count += 1
                    continue

                function_count += 1
                self._open_call(event)
            elif event.kind.closes_call:
                if not self._stack:
                    unmatched_exits += 1
                    continue
                self._close_call(event.time)

        if unmatched_exits:
            self.logger.debug(f"忽略 {unmatched_exits} 个没有对应入口的退出事件")
        if self._stack:
            self.logger.debug(f"{len(self._stack)} 个调用没有退出事件，耗时保持为空")
        if excluded_count:
            self.logger.debug(f"排除了 {excluded_count} 个调用")

        total_time_ms = 0.0
        if first_time is not None and last_time is not None:
            total_time_ms = calculate_duration_ms(first_time, last_time)

        meta = TraceMeta(
            total_time_ms=total_time_ms,
            function_count=function_count,
            timestamp=timestamp if timestamp is not None else current_timestamp(),
            php_version=self.php_version,
        )
        return TraceDocument(meta=meta, forest=self._materialize())

    def _open_call(self, event: TraceEvent):
        index = len(self._arena)
        self._arena.append(_ArenaNode(
            function=event.function,
            file=event.file,
            line=event.line,
            start_time=event.time,
        ))

        if self._stack:
            self._arena[self._stack[-1]].child_indices.append(index)
        else:
            self._root_indices.append(index)
        self._stack.append(index)

    def _close_call(self, end_time: float):
        node = self._arena[self._stack.pop()]
        node.end_time = end_time
        node.duration_ms = calculate_duration_ms(node.start_time, end_time)

    def _materialize(self) -> Tuple[CallRecord, ...]:
        """
        将 arena 转换为不可变的 CallRecord 树

        子节点的索引总是大于父节点，因此逆序遍历即可保证子节点先于父节点生成，
        不需要递归。
        """
        built: List[Optional[CallRecord]] = [None] * len(self._arena)
        for index in range(len(self._arena) - 1, -1, -1):
            node = self._arena[index]
            built[index] = CallRecord(
                function=node.function,
                file=node.file,
                line=node.line,
                start_time=node.start_time,
                end_time=node.end_time,
                duration_ms=node.duration_ms,
                children=tuple(built[i] for i in node.child_indices),
            )
        return tuple(built[i] for i in self._root_indices)


def build_call_tree(events: Sequence[TraceEvent],
                    exclude_patterns: Optional[Iterable[str]] = None,
                    php_version: str = 'unknown') -> TraceDocument:
    """
    构建调用树的便捷函数

    Args:
        events: 事件列表
        exclude_patterns: 排除模式列表
        php_version: 运行时版本标记

    Returns:
        TraceDocument: 解析结果
    """
    builder = CallTreeBuilder(php_version=php_version)
    return builder.build(events, ExclusionRuleSet(exclude_patterns))
