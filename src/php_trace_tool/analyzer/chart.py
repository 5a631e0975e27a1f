"""
可视化模块
"""

from pathlib import Path
from typing import Optional, Union
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

from ..formatters.markdown_formatter import SLOW_THRESHOLD_MS

logger = logging.getLogger(__name__)


def plot_slowest_functions(df: pd.DataFrame,
                           output_path: Union[str, Path],
                           top_n: int = 20) -> Optional[Path]:
    """
    绘制总耗时最高的函数条形图

    Args:
        df: calculate_function_statistics 生成的统计表
        output_path: 图片路径 (png)
        top_n: 显示的函数数量

    Returns:
        Optional[Path]: 图片路径，统计表为空时返回 None
    """
    if df.empty:
        logger.warning("统计表为空，不生成图表")
        return None

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    top = df.head(top_n).iloc[::-1]
    labels = [f"{row.function} ({Path(row.file).name}:{row.line})" for row in top.itertuples(index=False)]
    # 单次调用超过阈值的函数标红
    colors = ['tab:red' if row.max_ms >= SLOW_THRESHOLD_MS else 'tab:blue' for row in top.itertuples(index=False)]

    plt.rcParams['font.sans-serif'] = ['DejaVu Sans', 'Arial', 'sans-serif']
    plt.rcParams['axes.unicode_minus'] = False

    fig, ax = plt.subplots(figsize=(12, max(3, 0.4 * len(top) + 1)))
    try:
        positions = list(range(len(top)))
        ax.barh(positions, top['total_ms'].tolist(), color=colors)
        ax.set_yticks(positions)
        ax.set_yticklabels(labels)
        ax.set_xlabel('Total time (ms)')
        ax.set_title(f'Top {len(top)} functions by total time')
        ax.grid(axis='x', alpha=0.3)
        fig.tight_layout()
        fig.savefig(output_path, dpi=100)
    finally:
        plt.close(fig)

    logger.info(f"图表已生成: {output_path}")
    return output_path
