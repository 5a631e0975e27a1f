"""
跟踪文件读取
"""

import gzip
from pathlib import Path
from typing import List, Union


class FileSourceReader:
    """从本地文件系统读取跟踪文件，.gz 文件自动解压"""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def exists(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()

    def read_lines(self, path: Union[str, Path]) -> List[str]:
        """
        读取所有非空行

        Args:
            path: 文件路径

        Returns:
            List[str]: 去掉换行符后的行列表
        """
        path = Path(path)
        open_func = gzip.open if path.suffix == '.gz' else open
        with open_func(path, 'rt', encoding=self.encoding, errors='replace') as f:
            lines = [line.rstrip('\r\n') for line in f]
        return [line for line in lines if line]
