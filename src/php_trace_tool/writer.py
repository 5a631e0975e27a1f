"""
报告写入
"""

from pathlib import Path
from typing import Union


class FileWriter:
    """把渲染结果写入文件系统"""

    def __init__(self, create_directories: bool = True):
        self.create_directories = create_directories

    def write(self, content: str, filename: Union[str, Path]) -> Path:
        """
        写入文件

        Raises:
            FileNotFoundError: 父目录不存在且不允许创建
        """
        filename = Path(filename)
        directory = filename.parent

        if self.create_directories:
            directory.mkdir(parents=True, exist_ok=True)
        elif not directory.is_dir():
            raise FileNotFoundError(f"Directory does not exist: {directory}")

        with open(filename, 'w', encoding='utf-8') as f:
            f.write(content)
        return filename

    def delete(self, filename: Union[str, Path]) -> bool:
        """删除文件，文件不存在时返回 False"""
        filename = Path(filename)
        if not filename.exists():
            return False
        filename.unlink()
        return True

    def exists(self, filename: Union[str, Path]) -> bool:
        return Path(filename).exists()
