"""
运行期配置 - 读取 gdsplot.yaml

职责：
- 加载输出目录/默认样式表/并发/日志等运行参数
- 提供环境变量覆盖机制（GDSPLOT_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, EnvSettingsSource

DEFAULT_CONFIG_PATH = Path("gdsplot.yaml")
SECTIONS = ("concurrency", "output", "style", "logging")


class ConcurrencyConfig(BaseModel):
    """并发配置（多个单元可并行出图）"""

    max_workers: int = Field(1, ge=1)


class OutputConfig(BaseModel):
    """输出配置"""

    output_dir: Path = Path(".")
    suffix: str = ".png"


class StyleConfig(BaseModel):
    """样式表配置"""

    default_stylesheets: list[Path] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    concurrency: ConcurrencyConfig = Field(default_factory=ConcurrencyConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "GDSPLOT_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options") or {}
        values = {key: cls._extract(runtime_opts, key) for key in SECTIONS}

        # 环境变量优先于YAML
        env_values = EnvSettingsSource(cls)()
        config = cls(**_deep_merge(values, env_values))

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if not self.output.output_dir.is_absolute():
            self.output.output_dir = (base_dir / self.output.output_dir).resolve()
        self.style.default_stylesheets = [
            p if p.is_absolute() else (base_dir / p).resolve()
            for p in self.style.default_stylesheets
        ]

    def get_output_path(self, cell_name: str) -> Path:
        """获取单元输出文件路径"""
        return self.output.output_dir / f"{cell_name}{self.output.suffix}"

    def ensure_dirs(self) -> None:
        """确保输出目录存在"""
        self.output.output_dir.mkdir(parents=True, exist_ok=True)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """递归合并，override 覆盖 base"""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
