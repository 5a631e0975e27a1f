"""
Xdebug 函数跟踪文件 (format 1, 机器可读格式) 解析器
"""

import math
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union
import logging

from .call_tree_builder import CallTreeBuilder, ExclusionRuleSet
from .exceptions import SourceNotFound
from .models import EventKind, TraceDocument, TraceEvent
from .reader import FileSourceReader

logger = logging.getLogger(__name__)

# 列: Level  Function ID  0=entry 1=exit 2=return  Time  Memory
#     Function Name  User Defined  Include File  Filename  Line Number  Params
MIN_FIELDS = 4


def _parse_int(value: str, default: int = 0) -> int:
    try:
        return int(value)
    except ValueError:
        return default


def decode_event_line(line: str) -> Optional[TraceEvent]:
    """
    解析单行跟踪事件

    Args:
        line: 原始行 (制表符分隔)

    Returns:
        TraceEvent: 解析后的事件，格式不正确 (头尾标记行、少于4列、
        必需字段无法解析) 时返回 None
    """
    parts = line.split('\t')
    if len(parts) < MIN_FIELDS:
        return None

    try:
        depth = int(parts[0])
        call_id = int(parts[1])
        kind = EventKind(int(parts[2]))
        time = float(parts[3])
    except ValueError:
        return None

    if not math.isfinite(time):
        return None

    if kind is not EventKind.ENTRY:
        return TraceEvent(depth=depth, call_id=call_id, kind=kind, time=time)

    return TraceEvent(
        depth=depth,
        call_id=call_id,
        kind=kind,
        time=time,
        memory=_parse_int(parts[4]) if len(parts) > 4 else 0,
        function=parts[5] if len(parts) > 5 else 'unknown',
        file=parts[8] if len(parts) > 8 else '',
        line=_parse_int(parts[9]) if len(parts) > 9 else 0,
    )


def decode_event_lines(lines: Iterable[str]) -> Iterator[TraceEvent]:
    """逐行解码，跳过无法解析的行"""
    skipped = 0
    for line in lines:
        event = decode_event_line(line)
        if event is None:
            skipped += 1
            continue
        yield event
    if skipped:
        logger.debug(f"跳过 {skipped} 行非事件数据")


class TraceParser:
    """Xdebug 跟踪文件解析器"""

    def __init__(self, exclude_patterns: Optional[Iterable[str]] = None,
                 php_version: str = 'unknown',
                 reader=None):
        """
        Args:
            exclude_patterns: 排除的文件路径模式，None 时使用 vendor/ 和 composer/
            php_version: 写入汇总信息的运行时版本
            reader: 提供 exists()/read_lines() 的读取器
        """
        self.exclusion_rules = ExclusionRuleSet(exclude_patterns)
        self.php_version = php_version
        self.reader = reader if reader is not None else FileSourceReader()

    def set_exclude_patterns(self, patterns: Iterable[str]):
        """替换全部排除模式"""
        self.exclusion_rules = ExclusionRuleSet(patterns)

    def add_exclude_pattern(self, pattern: str):
        """追加排除模式"""
        self.exclusion_rules.add(pattern)

    def parse(self, trace_file: Union[str, Path], timestamp: Optional[str] = None) -> TraceDocument:
        """
        解析跟踪文件为调用树

        Args:
            trace_file: 跟踪文件路径
            timestamp: 报告生成时间，None 时取当前时间

        Returns:
            TraceDocument: 汇总信息和调用森林

        Raises:
            SourceNotFound: 文件不存在
        """
        if not self.reader.exists(trace_file):
            logger.error(f"文件不存在: {trace_file}")
            raise SourceNotFound(trace_file)

        logger.info(f"正在解析文件: {trace_file}")
        lines = self.reader.read_lines(trace_file)
        document = self.parse_lines(lines, timestamp=timestamp)
        logger.info(
            f"解析完成: {document.meta.function_count} 个函数, "
            f"总耗时 {document.meta.total_time_ms:.2f}ms, 根调用 {len(document.forest)} 个"
        )
        return document

    def parse_lines(self, lines: Iterable[str], timestamp: Optional[str] = None) -> TraceDocument:
        """解析已读取的行"""
        builder = CallTreeBuilder(php_version=self.php_version)
        return builder.build(decode_event_lines(lines), self.exclusion_rules, timestamp=timestamp)


def parse_trace_file(file_path: Union[str, Path],
                     exclude_patterns: Optional[List[str]] = None,
                     php_version: str = 'unknown') -> TraceDocument:
    """
    解析 Xdebug 跟踪文件

    Args:
        file_path: 跟踪文件路径
        exclude_patterns: 排除模式列表
        php_version: 运行时版本标记

    Returns:
        TraceDocument: 解析结果
    """
    return TraceParser(exclude_patterns, php_version=php_version).parse(file_path)
