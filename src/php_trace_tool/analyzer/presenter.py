"""
统计结果展示阶段
"""

from pathlib import Path
from typing import List, Sequence, Union
import logging

import pandas as pd

logger = logging.getLogger(__name__)

VALID_OUTPUT_FORMATS = ('csv', 'xlsx')


def format_markdown_table(df: pd.DataFrame, title: str) -> str:
    """把统计表格式化为 markdown 表格"""
    if df.empty:
        return f"\n## {title}\n\n无数据可显示\n"

    columns = list(df.columns)
    lines = [
        f"\n## {title}\n",
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join(["---"] * len(columns)) + " |",
    ]
    for row in df.itertuples(index=False):
        values = []
        for value in row:
            if isinstance(value, float):
                values.append(f"{value:.2f}")
            else:
                values.append(str(value).replace('|', '\\|'))
        lines.append("| " + " | ".join(values) + " |")
    return "\n".join(lines) + "\n"


def present_function_statistics(df: pd.DataFrame,
                                output_dir: Union[str, Path],
                                base_name: str,
                                output_formats: Sequence[str] = VALID_OUTPUT_FORMATS,
                                print_markdown: bool = False) -> List[Path]:
    """
    生成统计输出文件 (CSV 和 Excel)

    Args:
        df: 函数统计表
        output_dir: 输出目录
        base_name: 基础文件名
        output_formats: 输出格式列表 (csv, xlsx)
        print_markdown: 是否在 stdout 中打印 markdown 表格

    Returns:
        List[Path]: 生成的文件路径列表
    """
    for fmt in output_formats:
        if fmt not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"不支持的统计输出格式: {fmt}。支持的格式: {', '.join(VALID_OUTPUT_FORMATS)}")

    if print_markdown:
        print(format_markdown_table(df, f"{base_name} 函数统计"))

    if df.empty:
        logger.warning("没有数据可供展示")
        return []

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    files = []

    if 'csv' in output_formats:
        csv_file = output_path / f"{base_name}.csv"
        df.to_csv(csv_file, index=False, encoding='utf-8')
        files.append(csv_file)
        print(f"生成 CSV 文件: {csv_file}")

    if 'xlsx' in output_formats:
        excel_file = output_path / f"{base_name}.xlsx"
        with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='函数统计', index=False)
        files.append(excel_file)
        print(f"生成 Excel 文件: {excel_file}")

    return files
