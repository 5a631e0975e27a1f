"""
函数级统计
"""

import os
from typing import Callable
import logging

import pandas as pd

from ..formatters.json_formatter import format_json_path
from ..formatters.markdown_formatter import SLOW_THRESHOLD_MS
from ..models import TraceDocument
from ..utils.project_root import ProjectRootResolver
from ..utils.tree_utils import iter_preorder

logger = logging.getLogger(__name__)

STATISTICS_COLUMNS = [
    'function', 'file', 'line', 'calls', 'total_ms', 'self_ms',
    'mean_ms', 'min_ms', 'max_ms', 'slow_calls',
]


def calculate_function_statistics(document: TraceDocument,
                                  relative_paths: bool = True,
                                  exists: Callable[[str], bool] = os.path.exists) -> pd.DataFrame:
    """
    按 (函数, 文件, 行号) 聚合调用耗时

    没有耗时 (缺少退出事件) 的调用不参与统计。递归调用的总耗时会被重复计入，
    self_ms 不受影响。

    Args:
        document: 解析结果
        relative_paths: 是否把文件路径转为相对项目根目录的路径
        exists: 项目标记探测函数

    Returns:
        pd.DataFrame: 按 total_ms 降序排列的统计表
    """
    project_root = None
    if relative_paths:
        project_root = ProjectRootResolver(exists=exists).resolve(document.forest)

    rows = []
    for call, _ in iter_preorder(document.forest):
        if call.duration_ms is None:
            continue
        children_ms = sum(child.duration_ms for child in call.children if child.duration_ms is not None)
        rows.append({
            'function': call.function,
            'file': format_json_path(call.file, project_root),
            'line': call.line,
            'duration_ms': call.duration_ms,
            'self_ms': max(call.duration_ms - children_ms, 0.0),
            'is_slow': call.duration_ms >= SLOW_THRESHOLD_MS,
        })

    if not rows:
        logger.warning("没有带耗时的调用可供统计")
        return pd.DataFrame(columns=STATISTICS_COLUMNS)

    df = pd.DataFrame(rows)
    stats = df.groupby(['function', 'file', 'line'], sort=False).agg(
        calls=('duration_ms', 'size'),
        total_ms=('duration_ms', 'sum'),
        self_ms=('self_ms', 'sum'),
        mean_ms=('duration_ms', 'mean'),
        min_ms=('duration_ms', 'min'),
        max_ms=('duration_ms', 'max'),
        slow_calls=('is_slow', 'sum'),
    ).reset_index()

    for column in ('total_ms', 'self_ms', 'mean_ms', 'min_ms', 'max_ms'):
        stats[column] = stats[column].round(2)
    stats['slow_calls'] = stats['slow_calls'].astype(int)

    stats = stats.sort_values(['total_ms', 'function'], ascending=[False, True]).reset_index(drop=True)
    logger.info(f"统计了 {len(rows)} 次调用，{len(stats)} 个不同函数")
    return stats[STATISTICS_COLUMNS]
