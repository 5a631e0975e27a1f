"""
解析 -> 格式化 -> 写入 的流程编排
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging

from .config import TraceConfig
from .formatters import BaseFormatter, build_formatters
from .parser import TraceParser
from .writer import FileWriter

logger = logging.getLogger(__name__)

TRACE_EXTENSIONS = ('.xt', '.xt.gz')
OUTPUT_PREFIX = 'php-trace-'


class TraceManager:
    """跟踪文件处理流程"""

    def __init__(self, parser: Optional[TraceParser] = None,
                 formatters: Optional[Sequence[BaseFormatter]] = None,
                 writer: Optional[FileWriter] = None,
                 config: Optional[TraceConfig] = None):
        self.config = config if config is not None else TraceConfig()
        self.parser = parser if parser is not None else TraceParser(self.config.exclude_patterns)
        self.formatters = list(formatters) if formatters is not None else build_formatters(self.config.formats)
        self.writer = writer if writer is not None else FileWriter()

    @staticmethod
    def find_trace_file(base: Union[str, Path]) -> Optional[Path]:
        """
        查找实际的跟踪文件 (base 本身, base.xt 或 base.xt.gz)

        Returns:
            Optional[Path]: 找到的文件，找不到时返回 None
        """
        base = Path(base)
        if base.is_file():
            return base
        for extension in TRACE_EXTENSIONS:
            candidate = Path(f"{base}{extension}")
            if candidate.is_file():
                return candidate
        return None

    def process(self, trace_file: Union[str, Path],
                output_dir: Optional[Union[str, Path]] = None,
                timestamp: Optional[str] = None) -> List[Path]:
        """
        解析跟踪文件并写出所有格式的报告

        Args:
            trace_file: 跟踪文件路径
            output_dir: 输出目录，None 时按配置解析
            timestamp: 输出文件名中的时间戳，None 时取当前时间

        Returns:
            List[Path]: 生成的文件路径列表
        """
        output_dir = Path(output_dir) if output_dir is not None else self.config.resolve_output_dir()
        if timestamp is None:
            timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')

        document = self.parser.parse(trace_file)

        generated_files = []
        for formatter in self.formatters:
            content = formatter.render(document)
            output_file = output_dir / f"{OUTPUT_PREFIX}{timestamp}.{formatter.extension_tag()}"
            self.writer.write(content, output_file)
            logger.info(f"Trace file generated: {output_file}")
            generated_files.append(output_file)

        return generated_files

    def cleanup_trace_files(self, trace_file: Union[str, Path]) -> List[Path]:
        """
        删除原始跟踪文件及其 .xt / .xt.gz 对应文件

        只处理以 .xt 或 .xt.gz 结尾的文件，其它文件不删除。

        Returns:
            List[Path]: 已删除的文件
        """
        trace_file = Path(trace_file)
        base = None
        # .xt.gz 必须先于 .xt 检查
        for extension in reversed(TRACE_EXTENSIONS):
            if trace_file.name.endswith(extension):
                base = trace_file.parent / trace_file.name[:-len(extension)]
                break

        if base is None or not base.name:
            logger.warning(f"不是 .xt / .xt.gz 跟踪文件，跳过清理: {trace_file}")
            return []

        removed = []
        for extension in TRACE_EXTENSIONS:
            candidate = Path(f"{base}{extension}")
            if self.writer.delete(candidate):
                removed.append(candidate)
        return removed
