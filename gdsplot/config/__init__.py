"""
配置层 - 样式表解析与运行期配置

职责：
- 解析样式表（图层别名/样式类/出图比例等）并构建 Context
- 加载 gdsplot.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .runtime_config import RuntimeConfig, get_config, reload_config
from .stylesheet import ContextBuilder, load_context, load_stylesheet, parse_sheet, tokenize

__all__ = [
    "ContextBuilder",
    "load_stylesheet",
    "load_context",
    "parse_sheet",
    "tokenize",
    "RuntimeConfig",
    "get_config",
    "reload_config",
]
