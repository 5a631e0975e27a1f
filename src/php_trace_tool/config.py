# -*- coding: utf-8 -*-
"""
配置加载

phptrace.json 由 pydantic 模型校验，输出目录的环境变量覆盖由 pydantic-settings 读取。
"""

from pathlib import Path
from typing import List, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .call_tree_builder import DEFAULT_EXCLUDE_PATTERNS
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'phptrace.json'
VALID_FORMATS = {'json', 'markdown', 'md'}


class EnvironmentOverrides(BaseSettings):
    """环境变量中的配置覆盖"""

    model_config = SettingsConfigDict(case_sensitive=False, extra='ignore')

    trace_output_dir: Optional[str] = Field(
        default=None, description="输出目录，优先于配置文件 (TRACE_OUTPUT_DIR)"
    )


class TraceConfig(BaseModel):
    """工具配置"""

    model_config = ConfigDict(extra='ignore')

    exclude_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="排除的文件路径模式，路径包含任一模式即排除",
    )
    output_dir: str = Field(default='traces', description="报告输出目录")
    formats: List[str] = Field(
        default_factory=lambda: ['json', 'markdown'],
        description="报告格式: json, markdown, md",
    )

    @field_validator('formats')
    @classmethod
    def check_formats(cls, formats: List[str]) -> List[str]:
        for fmt in formats:
            if fmt not in VALID_FORMATS:
                raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(sorted(VALID_FORMATS))}")
        return formats

    @classmethod
    def from_file(cls, config_file: Union[str, Path]) -> 'TraceConfig':
        """
        从 JSON 文件加载配置

        Args:
            config_file: 配置文件路径

        Returns:
            TraceConfig: 配置对象

        Raises:
            ConfigError: 文件不存在、无法读取或内容不符合配置结构
        """
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")

        try:
            content = config_file.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {config_file}") from e

        try:
            config = cls.model_validate_json(content)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {config_file}: {e}") from e

        logger.info(f"已加载配置文件: {config_file}")
        return config

    @classmethod
    def load(cls, start_dir: Optional[Union[str, Path]] = None, max_levels: int = 5) -> 'TraceConfig':
        """
        从当前目录向上查找 phptrace.json，找不到时使用默认配置

        Args:
            start_dir: 起始目录，默认当前工作目录
            max_levels: 最多检查的目录层数
        """
        current_dir = Path(start_dir) if start_dir is not None else Path.cwd()

        for _ in range(max_levels):
            config_file = current_dir / CONFIG_FILENAME
            if config_file.exists():
                return cls.from_file(config_file)

            parent_dir = current_dir.parent
            if parent_dir == current_dir:
                break
            current_dir = parent_dir

        logger.debug("未找到配置文件，使用默认配置")
        return cls()

    def resolve_output_dir(self, cwd: Optional[Union[str, Path]] = None) -> Path:
        """
        输出目录优先级: 环境变量 TRACE_OUTPUT_DIR > 配置 > 默认值

        相对路径基于 cwd 转为绝对路径。
        """
        env_dir = EnvironmentOverrides().trace_output_dir
        if env_dir:
            return Path(env_dir)

        output_dir = Path(self.output_dir)
        if not output_dir.is_absolute():
            base = Path(cwd) if cwd is not None else Path.cwd()
            output_dir = base / output_dir
        return output_dir
