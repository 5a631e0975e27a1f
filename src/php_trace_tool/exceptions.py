# -*- coding: utf-8 -*-
"""
异常定义
"""


class TraceToolError(Exception):
    """所有工具异常的基类"""


class SourceNotFound(TraceToolError):
    """跟踪文件不存在"""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Trace file not found: {self.path}")


class EncodingFailure(TraceToolError):
    """结构化输出无法序列化"""


class ConfigError(TraceToolError):
    """配置文件缺失或格式错误"""
